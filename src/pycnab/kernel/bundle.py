"""Pydantic models for the bundle descriptor (bundle.json).

A bundle descriptor describes a distributable application: the images that
make it up, the invocation images that drive its lifecycle, and the
parameters, credentials, custom actions and outputs that a runtime wires
into those images.

Every model is frozen. Attribute names are snake_case and map to exactly one
camelCase wire key. Fields are declared in the alphabetical order of their
wire keys, which is the canonical order of the descriptor format.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel

from .schema import Schema
from .semver import SemVer

# Lifecycle actions every invocation image must support; custom actions extend these.
BUILTIN_ACTIONS: Tuple[str, ...] = ("install", "upgrade", "uninstall")


class DescriptorModel(BaseModel):
    """Base for all descriptor entities.

    Unknown wire keys are ignored. Optional fields that are absent (None)
    are omitted on output rather than written as null.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @model_serializer(mode="wrap")
    def omit_absent(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}

    def is_specified(self, field_name: str) -> bool:
        """True when ``field_name`` was given explicitly rather than defaulted."""
        return field_name in self.model_fields_set


class ImageType(str, Enum):
    """Interpretation of an image reference."""
    OCI = "oci"
    DOCKER = "docker"
    UNKNOWN = "unknown"  # any vocabulary this library does not know yet


class BaseImage(DescriptorModel):
    """Behaviour shared by ``Image`` and ``InvocationImage``."""

    @property
    def kind(self) -> ImageType:
        """imageType as a closed variant. Absent means OCI."""
        image_type = getattr(self, "image_type", None)
        if image_type is None:
            return ImageType.OCI
        try:
            return ImageType(image_type)
        except ValueError:
            return ImageType.UNKNOWN

    @property
    def pinned_reference(self) -> str:
        """The image reference pinned to ``contentDigest`` when one is known."""
        image: str = getattr(self, "image")
        digest: Optional[str] = getattr(self, "content_digest", None)
        if digest and "@" not in image:
            return f"{image}@{digest}"
        return image


class Platform(DescriptorModel):
    """A machine architecture plus an operating system."""
    arch: Optional[str] = None  # amd64, i386, arm64, ...
    os: Optional[str] = None  # linux, windows, darwin, ...


class Image(BaseImage):
    """A constituent image of the application described by the bundle."""
    content_digest: Optional[str] = None
    description: Optional[str] = None
    image: str
    image_type: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    media_type: Optional[str] = None
    platform: Optional[Platform] = None
    size: Optional[int] = Field(None, ge=0)


class InvocationImage(BaseImage):
    """A bootstrapping image that executes the bundle's actions.

    contentDigest is required at installation time but not during
    development, so it is optional here and checked by the runtime.
    """
    content_digest: Optional[str] = None
    image: str
    image_type: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    media_type: Optional[str] = None
    platform: Optional[Platform] = None
    size: Optional[int] = Field(None, ge=0)


class Maintainer(DescriptorModel):
    """A party responsible for the bundle. Only the name is required."""
    email: Optional[str] = None
    name: str
    url: Optional[str] = None


class Credential(DescriptorModel):
    """A credential injected into the invocation image at startup.

    env and path are a non-exclusive or: a credential may be placed in an
    environment variable, a file, or both.
    """
    description: Optional[str] = None
    env: Optional[str] = None
    path: Optional[str] = None
    required: bool = False

    @property
    def required_specified(self) -> bool:
        """Whether the document stated ``required`` (as opposed to defaulting it)."""
        return self.is_specified("required")


class Destination(DescriptorModel):
    """Where in the invocation image a parameter value is placed."""
    env: Optional[str] = None
    path: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.env is None and self.path is None


class Metadata(DescriptorModel):
    """Auxiliary description wrapper."""
    description: Optional[str] = None


class Parameter(DescriptorModel):
    """A caller-supplied value injected into the invocation image.

    The value's shape is described by the named entry in
    ``Bundle.definitions``; see ``Bundle.parameter_schema``.
    """
    apply_to: Optional[Tuple[str, ...]] = None
    definition: Optional[str] = None
    description: Optional[str] = None
    destination: Destination
    metadata: Optional[Metadata] = None
    required: bool = False

    @property
    def required_specified(self) -> bool:
        """Whether the document stated ``required`` (as opposed to defaulting it)."""
        return self.is_specified("required")

    def applies_to(self, action: str) -> bool:
        """An unset applyTo means the parameter applies to every action."""
        return self.apply_to is None or action in self.apply_to


class Action(DescriptorModel):
    """A custom action beyond install/upgrade/uninstall."""
    description: Optional[str] = None
    modifies: bool = False  # tracked as a release when true
    stateless: bool = False  # needs no installation, credentials or parameters


class Output(DescriptorModel):
    """A value produced by running an action."""
    apply_to: Optional[Tuple[str, ...]] = None
    definition: str
    description: Optional[str] = None
    path: Optional[str] = None

    def applies_to(self, action: str) -> bool:
        """An unset applyTo means every action produces the output."""
        return self.apply_to is None or action in self.apply_to


class Bundle(DescriptorModel):
    """A bundle descriptor.

    name, version, schemaVersion and invocationImages are required on the
    wire; invocationImages may be an empty array. Everything else is
    optional, and an absent collection (None) stays distinct from an empty
    one.
    """
    actions: Optional[Dict[str, Action]] = None
    credentials: Optional[Dict[str, Credential]] = None
    custom: Optional[Dict[str, Any]] = None  # vendor extension data, opaque JSON
    definitions: Optional[Dict[str, Any]] = None  # JSON Schema documents, opaque JSON
    description: Optional[str] = None
    images: Optional[Dict[str, Image]] = None
    invocation_images: Tuple[InvocationImage, ...]
    keywords: Optional[Tuple[str, ...]] = None
    license: Optional[str] = None  # SPDX identifier
    maintainers: Optional[Tuple[Maintainer, ...]] = None
    name: str = Field(min_length=1)
    outputs: Optional[Dict[str, Output]] = None
    parameters: Optional[Dict[str, Parameter]] = None
    schema_version: str
    version: SemVer

    @classmethod
    def from_json(cls, data: Any) -> "Bundle":
        """Parse a descriptor from JSON text or bytes."""
        from pycnab._internal.io.bundle_io import parse_bundle
        return parse_bundle(data)

    @classmethod
    def from_file(cls, source: Any) -> "Bundle":
        """Parse a descriptor from a file path or readable stream."""
        from pycnab._internal.io.bundle_io import load_bundle
        return load_bundle(source)

    def to_json(self, *, canonical: bool = False, indent: Optional[int] = None) -> str:
        from pycnab._internal.io.bundle_io import dump_bundle
        return dump_bundle(self, canonical=canonical, indent=indent)

    def action_names(self) -> Tuple[str, ...]:
        """Built-in lifecycle actions followed by custom actions (sorted)."""
        custom = sorted(name for name in (self.actions or {}) if name not in BUILTIN_ACTIONS)
        return BUILTIN_ACTIONS + tuple(custom)

    def get_action(self, name: str) -> Optional[Action]:
        return (self.actions or {}).get(name)

    def get_credential(self, name: str) -> Optional[Credential]:
        return (self.credentials or {}).get(name)

    def get_image(self, name: str) -> Optional[Image]:
        return (self.images or {}).get(name)

    def get_output(self, name: str) -> Optional[Output]:
        return (self.outputs or {}).get(name)

    def get_parameter(self, name: str) -> Optional[Parameter]:
        return (self.parameters or {}).get(name)

    def get_definition(self, name: str) -> Optional[Schema]:
        """Typed view of a definition, or None when it is not declared.

        Boolean schemas are read as their object equivalents: ``true`` is
        ``{}`` (anything) and ``false`` is ``{"not": {}}`` (nothing).

        Raises:
            pydantic.ValidationError: If the definition is neither a JSON
                object nor a boolean
        """
        definitions = self.definitions or {}
        if name not in definitions:
            return None
        definition = definitions[name]
        if definition is True:
            definition = {}
        elif definition is False:
            definition = {"not": {}}
        return Schema.model_validate(definition)

    def parameter_schema(self, name: str) -> Optional[Schema]:
        """Schema referenced by parameter ``name``, if both exist."""
        parameter = self.get_parameter(name)
        if parameter is None or parameter.definition is None:
            return None
        return self.get_definition(parameter.definition)

    def output_schema(self, name: str) -> Optional[Schema]:
        """Schema referenced by output ``name``, if both exist."""
        output = self.get_output(name)
        if output is None:
            return None
        return self.get_definition(output.definition)

    def parameters_for_action(self, action: str) -> Dict[str, Parameter]:
        return {
            name: parameter
            for name, parameter in (self.parameters or {}).items()
            if parameter.applies_to(action)
        }

    def outputs_for_action(self, action: str) -> Dict[str, Output]:
        return {
            name: output
            for name, output in (self.outputs or {}).items()
            if output.applies_to(action)
        }
