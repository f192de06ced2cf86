"""pycnab: data model and (de)serializer for CNAB bundle descriptors."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("pycnab")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from pycnab.api import (
    ValidationIssue,
    ValidationResult,
    bundle_digest,
    dump_bundle,
    load_bundle,
    parse_bundle,
    validate,
)
from pycnab.codes import ValidationCode
from pycnab.errors import BundleFormatError, BundleIoError, BundleParseError
from pycnab.kernel.bundle import (
    Action,
    Bundle,
    Credential,
    Destination,
    Image,
    ImageType,
    InvocationImage,
    Maintainer,
    Metadata,
    Output,
    Parameter,
    Platform,
)
from pycnab.kernel.credential_set import CredentialBinding, CredentialSet, CredentialSource
from pycnab.kernel.schema import Schema
from pycnab.kernel.semver import SemVer

__all__ = [
    "__version__",
    "Action",
    "Bundle",
    "BundleFormatError",
    "BundleIoError",
    "BundleParseError",
    "Credential",
    "CredentialBinding",
    "CredentialSet",
    "CredentialSource",
    "Destination",
    "Image",
    "ImageType",
    "InvocationImage",
    "Maintainer",
    "Metadata",
    "Output",
    "Parameter",
    "Platform",
    "Schema",
    "SemVer",
    "ValidationCode",
    "ValidationIssue",
    "ValidationResult",
    "bundle_digest",
    "dump_bundle",
    "load_bundle",
    "parse_bundle",
    "validate",
]
