"""Content digests over the canonical JSON form of descriptors."""

import hashlib
import json
from pathlib import Path
from typing import Any, Union

from pycnab._internal.canonical_json import canonical_dumps

DIGEST_PREFIX = "sha256:"


def hash_document(obj: Any) -> str:
    """Compute SHA256 digest of a canonicalized JSON value tree.

    Args:
        obj: JSON value tree (dicts, lists, str, int, float, bool, None)

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")
    """
    canonical_str = canonical_dumps(obj)
    digest = hashlib.sha256(canonical_str.encode("utf-8")).hexdigest()
    return f"{DIGEST_PREFIX}{digest}"


def strip_digest_prefix(digest: str) -> str:
    """Return the bare hex part of a ``sha256:``-prefixed digest."""
    if digest.startswith(DIGEST_PREFIX):
        return digest[len(DIGEST_PREFIX):]
    return digest


def compute_canonical_json_sha256(path: Union[str, Path]) -> str:
    """Compute SHA256 of canonicalized JSON file contents.

    The file is hashed by value, so pretty-printed and compact renderings of
    the same document hash identically.

    Returns:
        Bare SHA256 hex digest (no prefix)
    """
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    canonical = canonical_dumps(data)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
