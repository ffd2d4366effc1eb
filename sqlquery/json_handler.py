"""JSON payload handling for SELECT queries."""

import re
from typing import Any, Dict
from .select import Select

_rx_name = re.compile(r'^\w+$')


def _check_name(kind: str, name: Any):
    if not isinstance(name, str) or not _rx_name.match(name):
        raise ValueError(f'Invalid {kind} name: {name!r}')


def json_select(payload: Dict[str, Any], db: Any = None) -> Select:
    """Build a Select from a JSON payload.

    Payload keys: ``table`` (required), ``fields`` ('*' or a list of columns),
    ``where`` (list of ``{"column", "operator", "value", "connector"}``),
    ``order_by`` (list of ``{"field", "direction"}``), ``limit`` and ``offset``.
    Names are checked against ``^\\w+$`` since they come from clients.
    """
    required = ['table']
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f'Missing required fields: {missing}')
    _check_name('table', payload['table'])
    fields = payload.get('fields', '*')
    if fields != '*':
        if not isinstance(fields, list) or not fields:
            raise ValueError(f'Invalid fields: {fields!r}')
        for f in fields:
            _check_name('column', f)
    query = Select(payload['table'], fields, db=db)
    conditions = payload.get('where', [])
    if not isinstance(conditions, list):
        raise ValueError(f'Invalid where: {conditions!r}')
    for i, cond in enumerate(conditions):
        if not isinstance(cond, dict) or 'column' not in cond:
            raise ValueError(f'Invalid condition: {cond!r}')
        _check_name('column', cond['column'])
        connector = 'where' if i == 0 else cond.get('connector', 'and')
        if not isinstance(connector, str):
            raise ValueError(f'Invalid connector: {connector!r}')
        args = (cond['value'],) if 'value' in cond else ()
        query.add(connector, cond['column'], *args, op=cond.get('operator'))
    order = []
    ordering = payload.get('orderby', payload.get('order_by', []))
    if not isinstance(ordering, list):
        raise ValueError(f'Invalid order_by: {ordering!r}')
    for o in ordering:
        if not isinstance(o, dict):
            raise ValueError(f'Invalid order_by: {o!r}')
        _check_name('column', o.get('field'))
        direction = o.get('direction', 'ASC')
        if not isinstance(direction, str) or direction.upper() not in ('ASC', 'DESC'):
            raise ValueError(f'Invalid order direction: {direction!r}')
        order.append(f'{o["field"]} {direction.upper()}')
    if order:
        query.order_by(*order)
    limit, offset = payload.get('limit'), payload.get('offset')
    if limit is not None:
        if offset is not None:
            query.limit(offset, limit)
        else:
            query.limit(limit)
    elif offset is not None:
        raise ValueError('offset requires limit')
    return query
