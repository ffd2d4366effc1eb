"""Driver-specific rewriting of positional placeholders."""

import re
from typing import Any, Sequence, Tuple

# Quoted literals, quoted identifiers and comments are matched first so a '?'
# inside them is left alone.
_rx_qmark = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r'|`(?:[^`]|``)*`'
    r'|--[^\n]*'
    r'|/\*.*?\*/'
    r'|\?',
    re.S
)


def count_placeholders(sql: str) -> int:
    """Count '?' placeholders outside quotes and comments."""
    return sum(1 for m in _rx_qmark.finditer(sql) if m.group(0) == '?')


def adapt_sql(sql: str, values: Sequence[Any], paramstyle: str) -> Tuple[str, Tuple[Any, ...]]:
    """Rewrite '?' placeholders into the DBAPI paramstyle of the driver.

    qmark drivers get the statement unchanged and do their own binding.
    """
    values = tuple(values)
    if paramstyle == 'qmark':
        return sql, values
    n = count_placeholders(sql)
    if n != len(values):
        raise ValueError(f'{n} placeholders but {len(values)} values: {sql}')
    if not values:
        return sql, values
    if paramstyle in ('format', 'pyformat'):
        # literal percent signs must be doubled once parameters are bound
        parts = []
        pos = 0
        for m in _rx_qmark.finditer(sql):
            tok = m.group(0)
            parts.append(sql[pos:m.start()].replace('%', '%%'))
            parts.append('%s' if tok == '?' else tok.replace('%', '%%'))
            pos = m.end()
        parts.append(sql[pos:].replace('%', '%%'))
        return ''.join(parts), values
    if paramstyle == 'numeric':
        counter = iter(range(1, n + 1))
        return _rx_qmark.sub(lambda m: f':{next(counter)}' if m.group(0) == '?' else m.group(0), sql), values
    raise ValueError(f'Unsupported paramstyle: {paramstyle}')
