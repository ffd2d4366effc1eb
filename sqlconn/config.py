"""Environment-driven connection settings."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine.url import make_url

logger = logging.getLogger(__name__)

DEFAULT_URL = 'sqlite:///:memory:'


def _as_bool(v: Optional[str], default: bool) -> bool:
    if v is None:
        return default
    return v.strip().lower() in {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Config:
    DB_URL: str
    ECHO: bool
    DEBUG: bool
    LOG_LEVEL: str

    def validate(self) -> None:
        """Reject URLs for drivers other than MySQL and SQLite."""
        db = make_url(self.DB_URL).get_backend_name()
        if db not in ('mysql', 'sqlite'):
            raise ValueError(f'Unsupported database: {db}')
        if not isinstance(logging.getLevelName(self.LOG_LEVEL.upper()), int):
            raise ValueError(f'Unknown log level: {self.LOG_LEVEL}')


def load_config() -> Config:
    cfg = Config(
        DB_URL=os.getenv('SQLQUERY_DB_URL', DEFAULT_URL),
        ECHO=_as_bool(os.getenv('SQLQUERY_ECHO'), False),
        DEBUG=_as_bool(os.getenv('SQLQUERY_DEBUG'), False),
        LOG_LEVEL=os.getenv('SQLQUERY_LOG_LEVEL', 'info'),
    )
    cfg.validate()
    return cfg
