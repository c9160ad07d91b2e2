"""
Query engine over a PhoneBook.

Use PhoneBook for storage/indexing. This module caps and shapes the
results of lookups so callers such as the HTTP API get plain lists.
"""

from itertools import islice, takewhile
from typing import Any, Dict, Iterable, List, Optional


# ------------------ Query Engine ------------------
class QueryEngine:
    def __init__(self, book):
        self.book = book

    @staticmethod
    def _take(rows: Iterable[Dict[str, Any]], limit: Optional[int]) -> List[Dict[str, Any]]:
        if limit is None:
            return list(rows)
        return list(islice(rows, max(0, limit)))

    def by_name(self, name: str) -> Optional[Dict[str, Any]]:
        return self.book.lookup(name)

    def by_number(self, phone: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._take(self.book.lookup_number(phone), limit)

    def by_prefix(self, prefix: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._take(self.book.prefix_search(prefix), limit)

    def range_by_name(self, start: Optional[str] = None, stop: Optional[str] = None,
                      limit: Optional[int] = None) -> List[Dict[str, Any]]:
        if start is None:
            rows = self.book.entries()
            if stop is not None:
                rows = takewhile(lambda rec: rec["name"] < stop, rows)
        else:
            rows = self.book.names_between(start, stop)
        return self._take(rows, limit)
