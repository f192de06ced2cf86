"""Credential set models.

A credential set maps the credentials a bundle declares to the places a
runtime can find their values: a literal value, a host environment variable,
or a host file path.
"""

from typing import Optional, Tuple

from pydantic import Field

from .bundle import DescriptorModel


class CredentialSource(DescriptorModel):
    """Where the value of one credential comes from on the host."""
    env: Optional[str] = None
    path: Optional[str] = None
    value: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.env is None and self.path is None and self.value is None


class CredentialBinding(DescriptorModel):
    """One named credential and its source."""
    name: str = Field(min_length=1)
    source: CredentialSource


class CredentialSet(DescriptorModel):
    """A named, ordered collection of credential bindings."""
    credentials: Tuple[CredentialBinding, ...]
    name: str = Field(min_length=1)

    def get(self, name: str) -> Optional[CredentialBinding]:
        for binding in self.credentials:
            if binding.name == name:
                return binding
        return None

    def names(self) -> Tuple[str, ...]:
        return tuple(binding.name for binding in self.credentials)
