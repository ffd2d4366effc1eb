"""Database connection holder used by the query builder and record mapper."""

import pandas as pd
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from .adapt_sql import adapt_sql
from .audit import Audit, audited
from .config import Config, load_config
from .errors import ConnectError, ExecutionError, NoConnectionError
import logging

logger = logging.getLogger(__name__)

Bindings = Optional[Union[Sequence[Any], Mapping[str, Any]]]

_last_id_sql = {
    'sqlite': 'SELECT last_insert_rowid()',
    'mysql': 'SELECT LAST_INSERT_ID()',
}

# Statements run once on every new connection
_session_sql = {
    'mysql': 'SET NAMES utf8',
}


class DbCon:
    """Holds one database connection and runs statements against it.

    Statements bound with a sequence use '?' positional placeholders, which
    are rewritten to the driver's own style. Statements bound with a mapping
    use ':name' placeholders and go through SQLAlchemy's text() binding.
    Every successful statement is appended to ``queries`` together with its
    elapsed time in milliseconds.
    """
    def __init__(
        self, conn: Optional[Union[str, URL]] = None, echo: bool = False,
        debug: bool = False, callback: Optional[Callable[[str], str]] = None
    ):
        self.echo = echo
        self.debug = debug
        self.callback = callback
        self.audit = True
        self.audit_obj = Audit()
        self.url: Optional[URL] = None
        self.engine: Optional[Engine] = None
        self.db: Optional[str] = None
        self._conn: Optional[Connection] = None
        if conn is not None:
            self.connect(conn)

    @classmethod
    def mysql(cls, host: str, user: str, password: str, database: str, **kwargs) -> 'DbCon':
        """Connected holder for a MySQL server."""
        con = cls(**kwargs)
        con.connect_mysql(host, user, password, database)
        return con

    @classmethod
    def sqlite(cls, path: str, **kwargs) -> 'DbCon':
        """Connected holder for a SQLite file (or ':memory:')."""
        con = cls(**kwargs)
        con.connect_sqlite(path)
        return con

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> 'DbCon':
        cfg = cfg or load_config()
        return cls(cfg.DB_URL, echo=cfg.ECHO, debug=cfg.DEBUG)

    def connect_mysql(self, host: str, user: str, password: str, database: str):
        url = URL.create('mysql+mysqlconnector', username=user, password=password, host=host, database=database)
        self.connect(url)

    def connect_sqlite(self, path: str):
        self.connect(URL.create('sqlite', database=path))

    def connect(self, conn: Union[str, URL]):
        """Open a connection, replacing any handle that is already active."""
        try:
            url = make_url(conn)
            db = url.get_backend_name()
            if db not in _last_id_sql:
                raise ConnectError(f'Unsupported database: {db}')
            engine = create_engine(url, echo=self.echo, isolation_level='AUTOCOMMIT')
            connection = engine.connect()
            try:
                if db in _session_sql:
                    connection.exec_driver_sql(_session_sql[db])
            except SQLAlchemyError:
                connection.close()
                engine.dispose()
                raise
        except (SQLAlchemyError, ImportError) as e:
            raise ConnectError(f'Could not connect to {conn}: {e}') from e
        self.close()
        self.url, self.engine, self._conn, self.db = url, engine, connection, db
        logger.info(f'Connected to {url.render_as_string(hide_password=True)}')

    @property
    def connection(self) -> Connection:
        """The active connection."""
        if self._conn is None:
            raise NoConnectionError('No database connection found.')
        return self._conn

    @property
    def queries(self) -> List[Dict[str, Any]]:
        return self.audit_obj.entries

    def _log(self, sql: str, params: Any):
        """Log SQL and params if debug enabled."""
        if self.debug:
            logger.debug(f'SQL: {sql} | Params: {params}')

    def execute(self, sql: str, bindings: Bindings = None) -> CursorResult:
        """Run one statement and return its cursor."""
        if callable(self.callback):
            sql = self.callback(sql)
        return self._execute(sql, bindings)

    @audited
    def _execute(self, sql: str, bindings: Bindings) -> CursorResult:
        conn = self.connection
        self._log(sql, bindings)
        named = isinstance(bindings, Mapping)
        if not named:
            try:
                stmt, values = adapt_sql(sql, bindings or (), self.engine.dialect.paramstyle)
            except ValueError as e:
                logger.error(f'Query failed: {sql} | {e}')
                raise ExecutionError(sql, e) from e
        try:
            if named:
                return conn.execute(text(sql), dict(bindings))
            return conn.exec_driver_sql(stmt, values or None)
        except SQLAlchemyError as e:
            logger.error(f'Query failed: {sql} | {e}')
            raise ExecutionError(sql, e) from e

    def query(self, sql: str, bindings: Bindings = None) -> int:
        """Run a statement whose rows are not needed; returns the row count."""
        return self.execute(sql, bindings).rowcount

    def rows(self, sql: str, bindings: Bindings = None, cls: Optional[type] = None) -> List[Any]:
        """All result rows, as ``cls`` instances or as dicts."""
        result = self.execute(sql, bindings)
        if not result.returns_rows:
            return []
        return [self._materialize(m, cls) for m in result.mappings().all()]

    def row(self, sql: str, bindings: Bindings = None, cls: Optional[type] = None) -> Optional[Any]:
        """First result row, as a ``cls`` instance or a dict; None if empty."""
        result = self.execute(sql, bindings)
        if not result.returns_rows:
            return None
        m = result.mappings().first()
        return None if m is None else self._materialize(m, cls)

    def field(self, sql: str, bindings: Bindings = None) -> Any:
        """Column zero of the first row, or None."""
        result = self.execute(sql, bindings)
        return result.scalar() if result.returns_rows else None

    def frame(self, sql: str, bindings: Bindings = None) -> pd.DataFrame:
        """Fetch query results as DataFrame."""
        result = self.execute(sql, bindings)
        if not result.returns_rows:
            return pd.DataFrame()
        return pd.DataFrame([dict(m) for m in result.mappings().all()], columns=list(result.keys()))

    def last_insert_id(self) -> Any:
        """Identity value generated by the most recent insert on this handle."""
        return self.connection.exec_driver_sql(_last_id_sql[self.db]).scalar()

    @staticmethod
    def _materialize(mapping: Mapping[str, Any], cls: Optional[type]) -> Any:
        if cls is None:
            return dict(mapping)
        if hasattr(cls, 'from_row'):
            return cls.from_row(mapping)
        return cls(**mapping)

    def close(self):
        """Close the connection and dispose of the engine."""
        if self._conn is not None:
            logger.debug(f'Closing after {len(self.audit_obj)} statements in {self.audit_obj.total_time():.3f} ms')
            self._conn.close()
            self._conn = None
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
