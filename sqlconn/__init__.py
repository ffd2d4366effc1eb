from .conn import DbCon
from .audit import Audit, audited
from .adapt_sql import adapt_sql, count_placeholders
from .config import Config, load_config
from .errors import (
    QueryError, NoConnectionError, ConnectError, ExecutionError,
    InvalidClauseError, PrimaryKeyError
)

__all__ = [
    'DbCon', 'Audit', 'audited', 'adapt_sql', 'count_placeholders',
    'Config', 'load_config', 'QueryError', 'NoConnectionError',
    'ConnectError', 'ExecutionError', 'InvalidClauseError', 'PrimaryKeyError'
]
