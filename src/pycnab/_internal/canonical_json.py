"""Centralized canonical JSON serialization.

This module provides the single function used for byte-stable descriptor
output: canonical bundle dumps, credential set dumps and digest computation.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Serialize a descriptor value tree to its canonical text.

    Guarantees for descriptors:
    - Documents that parse to the same content give identical text, whatever
      key order or whitespace they were written with, so bundle digests are
      stable across re-serialization.
    - Order-carrying arrays (keywords, maintainers, invocationImages, applyTo)
      are never reordered.
    - Non-ASCII names and descriptions are kept as UTF-8 text, so the digest
      is taken over the same bytes a file write produces.

    Args:
        obj: Wire-form value tree (output of ``model_dump(mode="json", by_alias=True)``)

    Returns:
        Compact JSON text with object keys sorted at every level
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
