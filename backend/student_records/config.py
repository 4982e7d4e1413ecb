"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    SQL_ECHO: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'students.db'}")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self._validate()

    def _validate(self):
        if self.ENV == "prod" and self.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
            raise RuntimeError("DATABASE_URL must point at a durable database in prod")


settings = Settings()
