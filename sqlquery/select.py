"""Chained builder for single-table SELECT statements."""

from typing import Any, List, Optional, Sequence, Union
import logging
import pandas as pd
from sqlconn.errors import InvalidClauseError, NoConnectionError
from .conditions import Condition, _missing
from .mappings import Op, connectors

logger = logging.getLogger(__name__)


class Select:
    """Accumulates WHERE/ORDER BY/LIMIT state and renders one SELECT.

    Predicates are added with ``where`` first and ``and_``/``or_`` after it.
    Each renders ``column <operator> ?`` and appends its values in
    placeholder order, so ``values`` always lines up with the '?' marks
    in ``build()``.

        Select('users', db=db).where('age', 30, Op.GREATER).and_('name', None, Op.NOT_NULL).rows()
    """
    def __init__(self, table: Union[str, type], fields: Union[str, Sequence[str]] = '*',
                 db: Any = None, cls: Optional[type] = None):
        if isinstance(table, type):
            cls = table
            table = table.__table__
        self.table = table
        self.cls = cls
        self.db = db
        if isinstance(fields, str):
            self.fields = fields
        elif isinstance(fields, (list, tuple)) and fields and all(isinstance(f, str) for f in fields):
            self.fields = ', '.join(fields)
        else:
            raise InvalidClauseError(f'Invalid projection: {fields!r}')
        self._where = ''
        self._values: List[Any] = []
        self._order_by: Optional[str] = None
        self._limit: Optional[str] = None

    def add(self, connector: str, column: str, value: Any = _missing, op: Union[Op, str, None] = None) -> 'Select':
        """Append one predicate after the given connector ('where', 'and' or 'or')."""
        key = connector.lower().rstrip('_') if isinstance(connector, str) else None
        if key not in connectors:
            raise InvalidClauseError(f'Invalid connector: {connector!r}')
        if key == 'where' and self._where:
            raise InvalidClauseError('where() already called; chain with and_() or or_()')
        if key != 'where' and not self._where:
            raise InvalidClauseError(f'{key}_() called before where()')
        frag, values = Condition(column, value, op).to_sql()
        if key != 'where':
            self._where += f' {connectors[key]} '
        self._where += frag
        self._values.extend(values)
        return self

    def where(self, column: str, value: Any = _missing, op: Union[Op, str, None] = None) -> 'Select':
        return self.add('where', column, value, op)

    def and_(self, column: str, value: Any = _missing, op: Union[Op, str, None] = None) -> 'Select':
        return self.add('and', column, value, op)

    def or_(self, column: str, value: Any = _missing, op: Union[Op, str, None] = None) -> 'Select':
        return self.add('or', column, value, op)

    def order_by(self, *fields: str) -> 'Select':
        """Set the ORDER BY text, e.g. order_by('age DESC', 'name')."""
        if not fields or not all(isinstance(f, str) and f.strip() for f in fields):
            raise InvalidClauseError(f'Invalid order_by: {fields}')
        self._order_by = ', '.join(fields)
        return self

    def limit(self, offset: int, limit: Optional[int] = None) -> 'Select':
        """limit(n) caps the row count; limit(offset, n) skips offset rows first."""
        for n in (offset, limit):
            if n is not None and (isinstance(n, bool) or not isinstance(n, int) or n < 0):
                raise InvalidClauseError(f'Invalid limit: {n!r}')
        self._limit = str(offset) if limit is None else f'{offset}, {limit}'
        return self

    @property
    def values(self) -> List[Any]:
        """Bound values in placeholder order."""
        return list(self._values)

    def build(self) -> str:
        """Render the accumulated state as SELECT text."""
        sql = f'SELECT {self.fields} FROM {self.table}'
        if self._where:
            sql += f' WHERE {self._where}'
        if self._order_by:
            sql += f' ORDER BY {self._order_by}'
        if self._limit:
            sql += f' LIMIT {self._limit}'
        return sql

    def _target(self) -> Optional[type]:
        return self.cls if self.fields == '*' else None

    def _con(self):
        if self.db is None:
            raise NoConnectionError('No database connection found.')
        return self.db

    def rows(self) -> List[Any]:
        return self._con().rows(self.build(), self._values, self._target())

    def row(self) -> Optional[Any]:
        return self._con().row(self.build(), self._values, self._target())

    def field(self) -> Any:
        return self._con().field(self.build(), self._values)

    def frame(self) -> pd.DataFrame:
        return self._con().frame(self.build(), self._values)

    def count(self) -> int:
        """Number of rows matching the predicates, ignoring ORDER BY and LIMIT."""
        sql = f'SELECT COUNT(*) FROM {self.table}'
        if self._where:
            sql += f' WHERE {self._where}'
        return self._con().field(sql, self._values)

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f'<Select {self.build()!r} {self._values!r}>'
