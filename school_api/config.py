"""Application settings and validation."""

import logging
import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    ALLOW_SQLITE_IN_PROD: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'app.db'}")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.ALLOW_SQLITE_IN_PROD = os.getenv("ALLOW_SQLITE_IN_PROD", "false").lower() == "true"
        self._validate()

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def _validate(self):
        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise RuntimeError(f"LOG_LEVEL must be a logging level name, got {self.LOG_LEVEL!r}")
        if self.ENV != "dev" and self.is_sqlite and not self.ALLOW_SQLITE_IN_PROD:
            raise RuntimeError("DATABASE_URL must point at a server database in non-dev environments")


settings = Settings()
