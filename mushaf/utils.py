"""
Utility functions: input parsing and a small page cache.
"""
import threading
from collections import OrderedDict


def convert_arabic_digits(text: str) -> str:
    """
    Convert Arabic-Indic numerals (٠-٩) to ASCII digits.

    Args:
        text: Input string

    Returns:
        String with converted digits
    """
    arabic_digits = "٠١٢٣٤٥٦٧٨٩"
    trans = str.maketrans(arabic_digits, "0123456789")
    return text.translate(trans)


def safe_int(text: str, default=None) -> int:
    """
    Safely parse an integer from user input, handling Arabic digits.

    Args:
        text: User input string
        default: Default value if parsing fails

    Returns:
        Integer value or default
    """
    try:
        return int(convert_arabic_digits(text.strip()))
    except (ValueError, TypeError, AttributeError):
        return default


class LRUCache:
    """Thread-safe LRU cache with a maximum size."""

    def __init__(self, max_size: int = 64):
        self._store: OrderedDict = OrderedDict()
        self._max_size = max_size
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            if key not in self._store:
                return None
            self._store.move_to_end(key)
            return self._store[key]

    def set(self, key, value) -> None:
        with self._lock:
            if key in self._store:
                self._store.move_to_end(key)
            self._store[key] = value
            if len(self._store) > self._max_size:
                self._store.popitem(last=False)

    def __contains__(self, key) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        return len(self._store)
