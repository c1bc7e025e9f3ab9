"""
Constraint codes and their per-query allocation.

Codes are one or more upper-case ASCII letters. Auto-assigned codes follow
spreadsheet-column order: ``A`` .. ``Z``, ``AA``, ``AB`` .. ``ZZ``, ``AAA`` and
so on. The logic keywords ``AND`` and ``OR`` are never codes.
"""

import re
from typing import Iterator, List, Set, Tuple

from imlogic.errors import DuplicateCodeError, InvalidCodeError
from imlogic.logging_config import get_logger

logger = get_logger(__name__)

CODE_PATTERN = re.compile(r"^[A-Z]+$")
RESERVED_CODES = frozenset({"AND", "OR"})
FIRST_CODE = "A"


def is_valid_code(code: object) -> bool:
    """Return True if ``code`` can name a constraint."""
    return (
        isinstance(code, str)
        and CODE_PATTERN.match(code) is not None
        and code not in RESERVED_CODES
    )


def validate_code(code: object) -> str:
    """Return ``code`` unchanged, or raise InvalidCodeError."""
    if not is_valid_code(code):
        raise InvalidCodeError(
            f"Invalid constraint code {code!r}: expected upper-case letters other than AND/OR"
        )
    return code


def _increment(code: str) -> str:
    chars = list(code)
    i = len(chars) - 1
    while i >= 0:
        if chars[i] != "Z":
            chars[i] = chr(ord(chars[i]) + 1)
            break
        chars[i] = "A"
        i -= 1
    else:
        chars.insert(0, "A")
    return "".join(chars)


def next_code(code: str) -> str:
    """
    Return the code that follows ``code`` in the assignment sequence.

    Args:
        code: Any string of upper-case letters (reserved words included)

    Returns:
        The successor, skipping ``AND`` and ``OR``
    """
    if not isinstance(code, str) or not CODE_PATTERN.match(code):
        raise InvalidCodeError(f"Invalid constraint code {code!r}")
    result = _increment(code)
    while result in RESERVED_CODES:
        result = _increment(result)
    return result


def sequence_key(code: str) -> Tuple[int, str]:
    """Sort key placing codes in assignment order."""
    return len(code), code


def code_sequence(start: str = FIRST_CODE) -> Iterator[str]:
    """Yield codes in assignment order, starting at ``start``."""
    code = validate_code(start)
    while True:
        yield code
        code = next_code(code)


class CodeAllocator:
    """
    Code namespace for a single query.

    Explicitly claimed and automatically allocated codes share the namespace;
    allocation hands out the first unused code from ``A`` onwards.
    """

    def __init__(self):
        self._used: Set[str] = set()
        # every code ordered before the cursor is in use
        self._cursor = FIRST_CODE

    @property
    def used(self) -> List[str]:
        return sorted(self._used, key=sequence_key)

    def __contains__(self, code: str) -> bool:
        return code in self._used

    def __len__(self) -> int:
        return len(self._used)

    def claim(self, code: str) -> str:
        """Reserve an explicit code."""
        validate_code(code)
        if code in self._used:
            raise DuplicateCodeError(code)
        self._used.add(code)
        logger.debug("Claimed constraint code %s", code)
        return code

    def allocate(self) -> str:
        """Reserve and return the next unused code."""
        code = self._cursor
        while code in self._used:
            code = next_code(code)
        self._used.add(code)
        self._cursor = code
        logger.debug("Allocated constraint code %s", code)
        return code

    def release(self, code: str) -> None:
        if code in self._used:
            self._used.discard(code)
            if sequence_key(code) < sequence_key(self._cursor):
                self._cursor = code
