"""Single predicates of a WHERE clause."""

from typing import Any, List, Tuple, Union
from sqlconn.errors import InvalidClauseError
from .mappings import Op

_missing = object()


class Condition:
    """Represents a single SQL condition (e.g., col > ?)."""
    __slots__ = ('field', 'op', 'values')

    def __init__(self, field: str, value: Any = _missing, op: Union[Op, str, None] = None):
        """Initialize condition, validating the value against the operator."""
        if not isinstance(field, str) or not field:
            raise InvalidClauseError(f'Invalid field name: {field!r}')
        self.field = field
        self.op = Op.parse(op)
        arity = self.op.arity
        if arity == 'none':
            self.values: List[Any] = []
        elif value is _missing:
            raise InvalidClauseError(f'Missing value for {field} {self.op.value}')
        elif arity == 'many':
            if isinstance(value, (str, bytes)) or not hasattr(value, '__iter__'):
                raise InvalidClauseError(f'{self.op.value} requires a list of values for {field}')
            self.values = list(value)
            if not self.values:
                raise InvalidClauseError(f'{self.op.value} requires at least one value for {field}')
        else:
            self.values = [value]

    def to_sql(self) -> Tuple[str, List[Any]]:
        """Convert condition to SQL fragment and positional values."""
        if self.op.arity == 'none':
            return f'{self.field} {self.op.value}', []
        if self.op.arity == 'many':
            return f'{self.field} {self.op.value} ({",".join("?" * len(self.values))})', list(self.values)
        return f'{self.field} {self.op.value} ?', list(self.values)

    @classmethod
    def from_input(cls, item: Any) -> 'Condition':
        """Create condition from a dict, a tuple or an existing Condition."""
        if isinstance(item, cls):
            return item
        if isinstance(item, dict):
            if 'column' not in item:
                raise InvalidClauseError(f'Condition without column: {item}')
            return cls(item['column'], item.get('value', _missing), item.get('operator'))
        if isinstance(item, tuple) and 1 <= len(item) <= 3:
            return cls(*item)
        raise InvalidClauseError(f'Unsupported condition type: {type(item)}')

    def __repr__(self) -> str:
        return f'Condition({self.field!r}, {self.op.name}, {self.values!r})'
