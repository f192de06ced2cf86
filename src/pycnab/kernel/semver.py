"""Semantic version value (semver.org 2.0.0) used for ``Bundle.version``."""

from __future__ import annotations

import re
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_serializer, model_validator

_NUMERIC = r"0|[1-9][0-9]*"
_PRERELEASE_ID = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"

SEMVER_PATTERN = re.compile(
    rf"(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?"
)


def parse_semver_parts(text: str) -> Dict[str, Any]:
    """Split a version string into its semver components.

    Raises:
        ValueError: If ``text`` is not MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]
    """
    match = SEMVER_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(
            f"'{text}' is not a valid semantic version "
            f"(expected MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD])"
        )
    prerelease = match.group("prerelease")
    build = match.group("build")
    return {
        "major": int(match.group("major")),
        "minor": int(match.group("minor")),
        "patch": int(match.group("patch")),
        "prerelease": tuple(prerelease.split(".")) if prerelease else (),
        "build": tuple(build.split(".")) if build else (),
    }


class SemVer(BaseModel):
    """A parsed semantic version.

    On the wire a version is a plain string; in memory it is this value, so
    every consumer sees a validated (major, minor, patch, prerelease, build)
    tuple. Ordering follows semver precedence: build metadata is ignored and
    a prerelease sorts before the release it precedes.
    """
    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def parse_string(cls, data: Any, info: ValidationInfo) -> Any:
        """Accept the wire form ("1.2.3-rc.1+build.5") as input.

        Component values are only accepted from Python; in a JSON document a
        version is always a string.
        """
        if isinstance(data, str):
            return parse_semver_parts(data)
        if info.mode == "json":
            raise ValueError(f"a version must be a string, not {type(data).__name__}")
        return data

    @model_validator(mode="after")
    def check_round_trip(self) -> SemVer:
        # components given directly must print to a string that parses back to them
        parts = parse_semver_parts(str(self))
        if parts["prerelease"] != self.prerelease or parts["build"] != self.build:
            raise ValueError(
                f"'{self}' does not split back into prerelease {self.prerelease!r} "
                f"and build {self.build!r}"
            )
        return self

    @model_serializer
    def to_string(self) -> str:
        return str(self)

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        return cls.model_validate(text)

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += "-" + ".".join(self.prerelease)
        if self.build:
            version += "+" + ".".join(self.build)
        return version

    def precedence_key(self) -> Tuple[Any, ...]:
        """Sort key implementing semver precedence rules."""
        if not self.prerelease:
            return (self.major, self.minor, self.patch, 1, ())
        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.major, self.minor, self.patch, 0, identifiers)

    # Equality stays field-wise (build metadata included); ordering ignores build.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence_key() < other.precedence_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence_key() <= other.precedence_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence_key() > other.precedence_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self.precedence_key() >= other.precedence_key()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)
