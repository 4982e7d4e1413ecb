"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the student records backend.
Controllers are intentionally thin: they accept requests, delegate to
`StudentService`, and return JSON responses. Business errors are turned
into plain-text responses by a single handler using `ERROR_STATUS`.

Endpoints implemented:
- GET /students
- POST /students
- GET /students/by-address
- GET /students/between-age
- GET /students/name-address-age
- GET /students/{id}
- PUT /students/{id}/email
- PUT /students/{id}/address
- GET /health
"""

import json
import logging
import time
import uuid
from typing import List

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from . import repositories
from .config import settings
from .database import create_db_and_tables, get_session
from .errors import ConstraintViolation, NotFound, PreconditionFailed, StudentError, ValidationError
from .models import Address, Student, StudentSummary
from .schemas import StudentIn
from .services import StudentService

app = FastAPI(title="Student Records API")
logger = logging.getLogger("student_records.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

ERROR_STATUS = {
    ValidationError: 400,
    NotFound: 404,
    PreconditionFailed: 409,
    ConstraintViolation: 409,
}

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def student_request_logging(request: Request, call_next):
    """Tag responses with a request id and log each `/students` call.

    The log line names the matched route template and the `student_id`
    path parameter, if any, so updates to one student can be traced.
    """
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    if request.url.path.startswith("/students"):
        route = request.scope.get("route")
        logger.info(
            "student_request %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "method": request.method,
                    "route": getattr(route, "path", request.url.path),
                    "student_id": request.path_params.get("student_id"),
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(StudentError)
async def student_error_handler(request: Request, exc: StudentError):
    """Return the error message as plain text with its mapped status."""
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.info("business error %s on %s: %s", status_code, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=status_code)


def get_student_service(db: Session = Depends(get_session)) -> StudentService:
    """Build a `StudentService` bound to the request's session."""
    return StudentService(repositories.StudentRepository(db))


@app.get('/students', response_model=List[Student])
def list_students(svc: StudentService = Depends(get_student_service)):
    """List every stored student ordered by id."""
    return svc.get_all_student_details()


@app.post('/students', response_model=Student, status_code=201)
def create_student(payload: StudentIn, svc: StudentService = Depends(get_student_service)):
    """Create a student; the id is assigned by storage."""
    return svc.create_student(payload)


@app.get('/students/by-address', response_model=List[Student])
def students_by_address(address: Address, svc: StudentService = Depends(get_student_service)):
    """Return students whose address matches the JSON body exactly."""
    return svc.get_student_details_by_address(address)


@app.get('/students/between-age', response_model=List[Student])
def students_between_age(
    start_age: int = Query(alias="startAge"),
    end_age: int = Query(alias="endAge"),
    svc: StudentService = Depends(get_student_service),
):
    """Return students with `startAge <= age <= endAge`."""
    return svc.get_students_between_age(start_age, end_age)


@app.get('/students/name-address-age', response_model=List[StudentSummary])
def name_address_age(svc: StudentService = Depends(get_student_service)):
    """Project every student to its name, address and age."""
    return svc.get_name_address_age_of_all_students()


@app.get('/students/{student_id}', response_model=Student)
def get_student(student_id: int, svc: StudentService = Depends(get_student_service)):
    return svc.get_student(student_id)


@app.put('/students/{student_id}/email', response_model=Student)
def update_email(
    student_id: int,
    old_email: str = Query(alias="oldEmail"),
    new_email: str = Query(alias="newEmail"),
    svc: StudentService = Depends(get_student_service),
):
    """Change the email of a student, guarded by the current email.

    Fails with 409 when `oldEmail` is not the stored email.
    """
    return svc.update_student_email(student_id, old_email, new_email)


@app.put('/students/{student_id}/address', response_model=Student)
def update_address(student_id: int, address: Address, svc: StudentService = Depends(get_student_service)):
    """Replace the address of a student with the JSON body."""
    return svc.update_student_address(student_id, address)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
