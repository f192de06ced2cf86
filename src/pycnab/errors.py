"""Errors raised when a descriptor cannot be read or understood.

Callers branch on the two concrete classes: ``BundleIoError`` means the
source could not be read at all, ``BundleFormatError`` means it was read but
is not a valid descriptor. Both derive from ``BundleParseError``.
"""

from typing import Any, Dict, List, Optional, Sequence


def _dotted(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc)


class BundleParseError(Exception):
    """Raised when a descriptor could not be produced from a source."""


class BundleIoError(BundleParseError):
    """Raised when the source cannot be read (missing file, permission, broken stream).

    The underlying ``OSError`` is available as ``__cause__``.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class BundleFormatError(BundleParseError, ValueError):
    """Raised when the content is not well-formed JSON or does not match the model.

    ``errors`` holds the individual validation errors (pydantic error dicts);
    ``fields`` lists the wire locations they point at, e.g. ``version`` or
    ``parameters.arg1.destination``.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors: List[Dict[str, Any]] = list(errors or [])

    @property
    def fields(self) -> List[str]:
        seen: List[str] = []
        for error in self.errors:
            loc = error.get("loc") or ()
            if not loc:
                continue
            dotted = _dotted(loc)
            if dotted not in seen:
                seen.append(dotted)
        return seen

    @property
    def is_syntax_error(self) -> bool:
        """True when the input was not well-formed JSON at all."""
        return any(error.get("type") == "json_invalid" for error in self.errors)
