"""
Printing Result
===============

Outcome of a single print attempt.
"""

from typing import Any, Dict, Optional


class PrintingResult:
    """Success flag plus an insertion-ordered bag of diagnostic data."""

    def __init__(self, successful: bool = False, data: Optional[Dict[str, Any]] = None):
        self._successful = successful
        self._data = dict(data) if data else {}

    def set_successful(self, state: bool) -> 'PrintingResult':
        self._successful = bool(state)
        return self

    def was_successful(self) -> bool:
        return bool(self._successful)

    def add_data(self, key: str, value: Any) -> 'PrintingResult':
        self._data[key] = value
        return self

    def get_data(self) -> Dict[str, Any]:
        return self._data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {}
        for key, value in self._data.items():
            if isinstance(value, bytes):
                value = value.decode('utf-8', errors='replace')
            elif not isinstance(value, (str, int, float, bool, type(None), list, dict)):
                value = str(value)
            data[key] = value

        return {
            'success': self.was_successful(),
            'data': data,
        }

    def __repr__(self) -> str:
        return f'PrintingResult(successful={self._successful!r}, keys={list(self._data)!r})'
