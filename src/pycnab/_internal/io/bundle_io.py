"""Load and dump bundle descriptors and credential sets."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from pycnab._internal.canonical_json import canonical_dumps
from pycnab.errors import BundleFormatError, BundleIoError
from pycnab.kernel.bundle import Bundle
from pycnab.kernel.credential_set import CredentialSet
from pycnab.kernel.hash_utils import hash_document

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

PathSource = Union[str, os.PathLike]
Source = Union[PathSource, IO[str], IO[bytes]]

# Errors shown in a BundleFormatError message before summarising the rest
_MAX_REPORTED_ERRORS = 5


def _describe_errors(kind: str, errors: List[Dict[str, Any]]) -> str:
    if any(error.get("type") == "json_invalid" for error in errors):
        detail = errors[0].get("ctx", {}).get("error") or errors[0].get("msg", "")
        return f"Invalid JSON in {kind}: {detail}"

    parts = []
    for error in errors[:_MAX_REPORTED_ERRORS]:
        loc = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {error.get('msg', '')}")
    if len(errors) > _MAX_REPORTED_ERRORS:
        parts.append(f"... and {len(errors) - _MAX_REPORTED_ERRORS} more")
    return f"Invalid {kind} structure: " + "; ".join(parts)


def _validate(model_cls: Type[ModelT], data: Union[str, bytes], kind: str) -> ModelT:
    """Parse JSON text into ``model_cls``; any failure becomes BundleFormatError.

    Validation runs in strict JSON mode: a wrong JSON type is an error, never
    coerced (no "123" -> 123, no 1 -> true).
    """
    try:
        return model_cls.model_validate_json(data, strict=True)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        raise BundleFormatError(_describe_errors(kind, errors), errors=errors) from e


def _read_source(source: Source, kind: str) -> Union[str, bytes]:
    """Read the whole source. Files opened here are closed before returning."""
    if hasattr(source, "read"):
        try:
            return source.read()
        except UnicodeDecodeError as e:
            raise BundleFormatError(f"{kind} stream is not valid UTF-8: {e}") from e
        except (OSError, ValueError) as e:
            # ValueError: closed or detached stream
            raise BundleIoError(f"Failed to read {kind} stream: {e}") from e

    path = Path(source)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        reason = e.strerror or str(e)
        raise BundleIoError(f"Failed to read {kind} from {path}: {reason}", path=str(path)) from e


def _dump(model: BaseModel, canonical: bool, indent: Optional[int]) -> str:
    data = model.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if canonical:
        return canonical_dumps(data)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def parse_bundle(data: Union[str, bytes]) -> Bundle:
    """Parse a bundle descriptor from JSON text or UTF-8 bytes.

    Raises:
        BundleFormatError: If the text is not JSON or not a valid descriptor
    """
    bundle = _validate(Bundle, data, "bundle")
    logger.debug("Parsed bundle %s %s", bundle.name, bundle.version)
    return bundle


def load_bundle(source: Source) -> Bundle:
    """Load a bundle descriptor from a file path or a readable stream.

    Streams are read to the end but left open; the caller owns them.

    Raises:
        BundleIoError: If the source cannot be read
        BundleFormatError: If the content is not a valid descriptor
    """
    return parse_bundle(_read_source(source, "bundle"))


def bundle_to_dict(bundle: Bundle) -> Dict[str, Any]:
    """Wire-form value tree of ``bundle`` (camelCase keys, absent fields omitted)."""
    return bundle.model_dump(mode="json", by_alias=True, exclude_unset=True)


def dump_bundle(bundle: Bundle, *, canonical: bool = False, indent: Optional[int] = None) -> str:
    """Serialize a bundle to JSON text.

    Args:
        bundle: Bundle to serialize (not modified)
        canonical: Sorted keys, compact separators; byte-stable for equal content
        indent: Pretty-print indent for non-canonical output

    Returns:
        JSON text
    """
    return _dump(bundle, canonical, indent)


def write_bundle(bundle: Bundle, path: PathSource, *, canonical: bool = False, indent: Optional[int] = 2) -> Path:
    """Write ``bundle`` to ``path`` as UTF-8 JSON with a trailing newline."""
    out_path = Path(path)
    out_path.write_text(dump_bundle(bundle, canonical=canonical, indent=indent) + "\n", encoding="utf-8")
    logger.debug("Wrote bundle %s to %s", bundle.name, out_path)
    return out_path


def bundle_digest(bundle: Bundle) -> str:
    """Content digest of the bundle's canonical form ("sha256:<hex>")."""
    return hash_document(bundle_to_dict(bundle))


def parse_credential_set(data: Union[str, bytes]) -> CredentialSet:
    """Parse a credential set from JSON text or UTF-8 bytes.

    Raises:
        BundleFormatError: If the text is not JSON or not a valid credential set
    """
    credential_set = _validate(CredentialSet, data, "credential set")
    logger.debug("Parsed credential set %s (%d credentials)", credential_set.name, len(credential_set.credentials))
    return credential_set


def load_credential_set(source: Source) -> CredentialSet:
    """Load a credential set from a file path or a readable stream.

    Raises:
        BundleIoError: If the source cannot be read
        BundleFormatError: If the content is not a valid credential set
    """
    return parse_credential_set(_read_source(source, "credential set"))


def dump_credential_set(credential_set: CredentialSet, *, canonical: bool = False, indent: Optional[int] = None) -> str:
    return _dump(credential_set, canonical, indent)
