"""In-memory statement log and the timing decorator that feeds it."""

import time
import logging
import functools
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class Audit:
    """Append-only list of executed statements and their elapsed time."""
    def __init__(self):
        self.entries: List[Dict[str, Any]] = []

    def log(self, sql: str, elapsed_ms: float):
        """Record one successfully executed statement."""
        self.entries.append({'sql': sql, 'time': elapsed_ms})

    def total_time(self) -> float:
        return sum(e['time'] for e in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def audited(fn):
    """Decorator timing a statement method and logging it on success."""
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        sql = args[0] if args else kwargs.get('sql', '')
        start = time.perf_counter()
        result = fn(self, *args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000
        if self.audit:
            self.audit_obj.log(sql, elapsed)
        logger.debug(f'{fn.__name__} took {elapsed:.3f} ms')
        return result
    return wrapper
