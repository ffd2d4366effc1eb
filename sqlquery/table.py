"""Active-record base class for simple single-table data classes."""

import re
import logging
from dataclasses import asdict, dataclass, field, fields as dc_fields
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Union
from sqlconn.errors import NoConnectionError, PrimaryKeyError
from .select import Select

logger = logging.getLogger(__name__)


def _null_if_empty(value: Any) -> Any:
    """Empty strings are stored as NULL; 0 and False are kept."""
    if isinstance(value, (str, bytes)) and len(value) == 0:
        return None
    return value


def _as_id(value: Any) -> Optional[int]:
    """The identifier encoded by ``value``, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and re.match(r'^-?\d+(?:\.0*)?$', value.strip()):
        return int(value.strip().split('.')[0])
    return None


@dataclass
class Table:
    """Base for record classes; subclasses are dataclasses naming their table.

        @dataclass
        class User(Table):
            __table__ = 'users'
            name: str = ''
            age: Optional[int] = None

    Every declared field except ``id`` is a column written by insert() and
    update(). ``id`` is None until insert() fills it from the database.
    """
    __table__: ClassVar[str] = ''
    _db: ClassVar[Any] = None

    id: Optional[int] = field(default=None, kw_only=True)

    @classmethod
    def bind(cls, db: Any) -> type:
        """Attach a connection holder to this record class and its subclasses."""
        cls._db = db
        return cls

    @classmethod
    def _con(cls, db: Any = None) -> Any:
        db = db if db is not None else cls._db
        if db is None:
            raise NoConnectionError('No database connection found.')
        return db

    @classmethod
    def _table(cls) -> str:
        if not cls.__table__:
            raise TypeError(f'{cls.__name__} does not declare __table__')
        return cls.__table__

    @classmethod
    def columns(cls) -> List[str]:
        """Declared non-identifier fields, in declaration order."""
        if '__dataclass_fields__' not in cls.__dict__:
            raise TypeError(f'{cls.__name__} must be decorated with @dataclass')
        return [f.name for f in dc_fields(cls) if f.name != 'id']

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'Table':
        """Build a record from a result row; undeclared columns become plain attributes."""
        names = {f.name for f in dc_fields(cls) if f.init}
        rec = cls(**{k: v for k, v in row.items() if k in names})
        for k, v in row.items():
            if k not in names:
                setattr(rec, k, v)
        return rec

    def get(self, name: str) -> Any:
        """Value of ``name`` via get_<name>() when defined, else the attribute, else None."""
        getter = getattr(self, f'get_{name}', None)
        if callable(getter):
            return getter()
        return self.__dict__.get(name)

    def set(self, name: str, value: Any) -> 'Table':
        """Assign ``name`` via set_<name>() when defined, else directly; returns self."""
        setter = getattr(self, f'set_{name}', None)
        if callable(setter):
            setter(value)
        elif name in self.__dict__:
            setattr(self, name, value)
        else:
            raise AttributeError(f'{type(self).__name__} has no field {name!r}')
        return self

    def _values(self) -> Dict[str, Any]:
        return {c: _null_if_empty(getattr(self, c)) for c in self.columns()}

    def insert(self, db: Any = None):
        """INSERT this record and take the generated identifier."""
        if self.id is not None:
            raise PrimaryKeyError('Primary key is already set.')
        con = self._con(db)
        values = self._values()
        cols = list(values)
        sql = f'INSERT INTO {self._table()} ({", ".join(cols)}) VALUES ({", ".join(":" + c for c in cols)})'
        con.query(sql, values)
        self.id = con.last_insert_id()
        logger.debug(f'Inserted {type(self).__name__} id={self.id}')

    def update(self, db: Any = None):
        """UPDATE every column of this record's row."""
        if self.id is None:
            raise PrimaryKeyError('Primary key is not set.')
        con = self._con(db)
        values = self._values()
        sets = ', '.join(f'{c} = :{c}' for c in values)
        sql = f'UPDATE {self._table()} SET {sets} WHERE id = :id'
        con.query(sql, {'id': self.id, **values})

    def delete(self, db: Any = None):
        """DELETE this record's row."""
        if self.id is None:
            raise PrimaryKeyError('Primary key is not set.')
        con = self._con(db)
        con.query(f'DELETE FROM {self._table()} WHERE id = :id', {'id': self.id})

    @classmethod
    def select(cls, fields: Union[str, int, float, Sequence[str]] = '*', db: Any = None) -> Union['Table', None, Select]:
        """Record with identifier ``fields`` (or None), or a Select over the given projection."""
        ident = _as_id(fields)
        if ident is not None:
            sql = f'SELECT * FROM {cls._table()} WHERE id = :id'
            return cls._con(db).row(sql, {'id': ident}, cls)
        return Select(cls._table(), fields, db=db if db is not None else cls._db, cls=cls)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
