"""Exception types raised by the connection holder, builder and mapper."""


class QueryError(Exception):
    """Base class for every error raised by sqlconn and sqlquery."""


class NoConnectionError(QueryError):
    """No database handle has been established."""


class ConnectError(QueryError):
    """The driver could not open a connection."""


class ExecutionError(QueryError):
    """The driver failed to run a statement."""

    def __init__(self, sql: str, cause: Exception):
        super().__init__(f'Error executing query: {cause}')
        self.sql = sql
        self.cause = cause


class InvalidClauseError(QueryError, ValueError):
    """A predicate, ordering or limit clause could not be built."""


class PrimaryKeyError(QueryError):
    """A record's identifier is in the wrong state for the operation."""
