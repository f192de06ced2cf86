"""Public API for pycnab.

Parse, serialize and check bundle descriptors. Callers should use these
functions instead of importing from _internal.
"""

import os
from typing import IO, List, Optional, Union

from pydantic import BaseModel

from pycnab.codes import ValidationCode
from pycnab.errors import BundleFormatError, BundleIoError
from pycnab.kernel.bundle import Bundle

# Boundary functions are re-exported from the internal IO module
from pycnab._internal.io.bundle_io import (
    bundle_digest,
    bundle_to_dict,
    dump_bundle,
    dump_credential_set,
    load_bundle,
    load_credential_set,
    parse_bundle,
    parse_credential_set,
    write_bundle,
)

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "bundle_digest",
    "bundle_to_dict",
    "dump_bundle",
    "dump_credential_set",
    "load_bundle",
    "load_credential_set",
    "parse_bundle",
    "parse_credential_set",
    "validate",
    "write_bundle",
]


class ValidationIssue(BaseModel):
    """A single validation issue (error or warning)."""
    code: str  # a ValidationCode value
    message: str
    element_id: Optional[str] = None  # wire path of the offending element, e.g. "parameters.port"
    reference: Optional[str] = None  # the name that failed to resolve (definition, action)


class ValidationResult(BaseModel):
    """Result of checking a descriptor beyond what parsing enforces."""
    ok: bool  # True if no errors (warnings don't block)
    errors: List[ValidationIssue]  # Blocking issues
    warnings: List[ValidationIssue]  # Non-blocking issues


def _sort_key(issue: ValidationIssue):
    return (issue.code, issue.element_id or "", issue.reference or "")


def _check_definitions(bundle: Bundle, errors: List[ValidationIssue]) -> None:
    definitions = bundle.definitions or {}
    for name, parameter in (bundle.parameters or {}).items():
        if parameter.definition is not None and parameter.definition not in definitions:
            errors.append(ValidationIssue(
                code=ValidationCode.MISSING_DEFINITION.value,
                message=f"Parameter '{name}' references undefined definition '{parameter.definition}'",
                element_id=f"parameters.{name}",
                reference=parameter.definition,
            ))
    for name, output in (bundle.outputs or {}).items():
        if output.definition not in definitions:
            errors.append(ValidationIssue(
                code=ValidationCode.MISSING_DEFINITION.value,
                message=f"Output '{name}' references undefined definition '{output.definition}'",
                element_id=f"outputs.{name}",
                reference=output.definition,
            ))


def _check_apply_to(bundle: Bundle, warnings: List[ValidationIssue]) -> None:
    known_actions = set(bundle.action_names())
    scoped = [("parameters", name, p.apply_to) for name, p in (bundle.parameters or {}).items()]
    scoped += [("outputs", name, o.apply_to) for name, o in (bundle.outputs or {}).items()]
    for section, name, apply_to in scoped:
        for action in apply_to or ():
            if action not in known_actions:
                warnings.append(ValidationIssue(
                    code=ValidationCode.UNKNOWN_ACTION.value,
                    message=f"{section}.{name} applies to unknown action '{action}'",
                    element_id=f"{section}.{name}",
                    reference=action,
                ))


def validate(bundle: Union[Bundle, str, os.PathLike, IO[str], IO[bytes]]) -> ValidationResult:
    """
    Check a bundle descriptor for problems the data model itself does not reject.

    Parsing already enforces structure, required fields and version syntax.
    This adds the cross-field rules a runtime relies on: every parameter has
    somewhere to go, every referenced definition exists, every applyTo entry
    names an action.

    Args:
        bundle: A parsed Bundle, or a path/stream to load one from

    Returns:
        ValidationResult with errors and warnings, each sorted by
        (code, element_id, reference).

    This is READ-ONLY - no side effects, no file writes, no mutations.
    """
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    # 1. Structure (ERROR)
    if not isinstance(bundle, Bundle):
        try:
            bundle = load_bundle(bundle)
        except BundleIoError as e:
            errors.append(ValidationIssue(
                code=ValidationCode.SOURCE_UNREADABLE.value,
                message=str(e),
            ))
            return ValidationResult(ok=False, errors=errors, warnings=warnings)
        except BundleFormatError as e:
            errors.append(ValidationIssue(
                code=ValidationCode.INVALID_STRUCTURE.value,
                message=f"Failed to parse bundle: {e}",
            ))
            return ValidationResult(ok=False, errors=errors, warnings=warnings)

    # 2. Parameter destinations (ERROR)
    for name, parameter in (bundle.parameters or {}).items():
        if parameter.destination.is_empty:
            errors.append(ValidationIssue(
                code=ValidationCode.EMPTY_DESTINATION.value,
                message=f"Parameter '{name}' has a destination with neither env nor path",
                element_id=f"parameters.{name}",
            ))

    # 3. Definition references (ERROR)
    _check_definitions(bundle, errors)

    # 4. applyTo references (WARNING)
    _check_apply_to(bundle, warnings)

    # 5. Invocation images (WARNING) - required at install time, not at authoring time
    if not bundle.invocation_images:
        warnings.append(ValidationIssue(
            code=ValidationCode.NO_INVOCATION_IMAGES.value,
            message="Bundle declares no invocation images; it cannot be installed",
        ))

    # 6. Credential destinations (WARNING)
    for name, credential in (bundle.credentials or {}).items():
        if credential.env is None and credential.path is None:
            warnings.append(ValidationIssue(
                code=ValidationCode.EMPTY_CREDENTIAL_DESTINATION.value,
                message=f"Credential '{name}' has neither env nor path",
                element_id=f"credentials.{name}",
            ))

    errors.sort(key=_sort_key)
    warnings.sort(key=_sort_key)
    return ValidationResult(ok=not errors, errors=errors, warnings=warnings)
