"""Query builder and record mapper on top of sqlconn.DbCon."""

from .mappings import Op
from .conditions import Condition
from .select import Select
from .table import Table
from .json_handler import json_select

__all__ = [
    'Op',
    'Condition',
    'Select',
    'Table',
    'json_select'
]
