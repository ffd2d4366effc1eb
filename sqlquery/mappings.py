"""Predicate operators, their SQL rendering and accepted spellings."""

import re
from enum import Enum
from typing import Dict, Union
from sqlconn.errors import InvalidClauseError


class Op(Enum):
    """Comparison operator of a single predicate."""
    EQ = '='
    NOT = '!='
    NULL = 'IS NULL'
    NOT_NULL = 'IS NOT NULL'
    LIKE = 'LIKE'
    NOT_LIKE = 'NOT LIKE'
    IN = 'IN'
    NOT_IN = 'NOT IN'
    GREATER = '>'
    LESS = '<'
    GREATER_OR_EQUAL = '>='
    LESS_OR_EQUAL = '<='

    @classmethod
    def parse(cls, token: Union['Op', str, None]) -> 'Op':
        """Resolve an Op from an enum member, a name like 'NotIn' or 'greater_equal', or a symbol."""
        if token is None:
            return cls.EQ
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            raise InvalidClauseError(f'Invalid operator: {token!r}')
        key = re.sub(r'[\s_]', '', token).lower()
        try:
            return operator_tokens[key]
        except KeyError:
            raise InvalidClauseError(f'Invalid operator: {token!r}') from None

    @property
    def arity(self) -> str:
        """'none', 'one' or 'many' values consumed by the predicate."""
        if self in (Op.NULL, Op.NOT_NULL):
            return 'none'
        if self in (Op.IN, Op.NOT_IN):
            return 'many'
        return 'one'


# Normalised token -> operator; keys are lowercase with underscores removed
operator_tokens: Dict[str, Op] = {
    '': Op.EQ, 'eq': Op.EQ, 'equal': Op.EQ, 'equals': Op.EQ, '=': Op.EQ,
    'not': Op.NOT, 'ne': Op.NOT, 'notequal': Op.NOT, '!=': Op.NOT, '<>': Op.NOT,
    'null': Op.NULL, 'isnull': Op.NULL,
    'notnull': Op.NOT_NULL, 'isnotnull': Op.NOT_NULL,
    'like': Op.LIKE,
    'notlike': Op.NOT_LIKE,
    'in': Op.IN,
    'notin': Op.NOT_IN,
    'greater': Op.GREATER, 'gt': Op.GREATER, '>': Op.GREATER,
    'less': Op.LESS, 'lt': Op.LESS, '<': Op.LESS,
    'greaterorequal': Op.GREATER_OR_EQUAL, 'greaterequal': Op.GREATER_OR_EQUAL,
    'gte': Op.GREATER_OR_EQUAL, '>=': Op.GREATER_OR_EQUAL,
    'lessorequal': Op.LESS_OR_EQUAL, 'lessequal': Op.LESS_OR_EQUAL,
    'lte': Op.LESS_OR_EQUAL, '<=': Op.LESS_OR_EQUAL,
}

# Connector keyword placed before a predicate
connectors = {'where': '', 'and': 'AND', 'or': 'OR'}
