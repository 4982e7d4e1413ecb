"""CLI script to load students from a JSON file into the backend DB.
Usage: python scripts/seed_students.py --file students.json
"""
import sys
import argparse
import json
import pathlib
# Ensure `backend/` is on sys.path so `student_records` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from pydantic import ValidationError as SchemaError
from sqlmodel import Session
from student_records.database import engine, create_db_and_tables
from student_records.errors import StudentError
from student_records.repositories import StudentRepository
from student_records.schemas import StudentIn
from student_records.services import StudentService


def main(path: pathlib.Path) -> int:
    """Insert every student payload found in the JSON array at `path`.

    Rows failing validation or uniqueness are reported and skipped.
    Results are printed to stdout for a quick CLI feedback loop.
    Returns the number of rows that failed.
    """
    if not path.exists():
        print(f'File not found: {path}')
        return 1
    try:
        rows = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        print(f'Invalid JSON in {path}: {e}')
        return 1
    if not isinstance(rows, list):
        print('Expected a JSON array of students')
        return 1
    create_db_and_tables(engine)
    created = 0
    failed = 0
    with Session(engine) as session:
        svc = StudentService(StudentRepository(session))
        for idx, row in enumerate(rows):
            try:
                student = svc.create_student(StudentIn.model_validate(row))
            except (StudentError, SchemaError) as e:
                failed += 1
                print(f'Row {idx}: rejected: {e}')
                continue
            created += 1
            print(f'Row {idx}: created student {student.student_id}')
    print(f'Total created students: {created}, failed {failed}')
    return failed


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--file', type=pathlib.Path, required=True, help='JSON array of student payloads')
    args = parser.parse_args()
    sys.exit(1 if main(args.file) else 0)
