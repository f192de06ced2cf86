"""Typed view over a JSON Schema entry in ``Bundle.definitions``.

Definitions travel through the descriptor as opaque JSON values. This model
gives parameters and outputs a typed way to read the constraints a definition
declares. Constraints are stored as declared; checking a supplied value
against them is the job of whatever runtime injects the value.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class Schema(BaseModel):
    """The subset of JSON Schema keywords that descriptor tooling reads.

    Keywords not modelled here (``properties``, ``items``, ``$ref``, ...)
    are kept as extras, so ``to_wire()`` reproduces the definition.
    """
    allowed_values: Optional[List[Any]] = Field(None, alias="enum")
    content_encoding: Optional[str] = None
    default: Any = None
    description: Optional[str] = None
    exclusive_maximum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = None
    format: Optional[str] = None
    max_length: Optional[int] = Field(None, ge=0)
    maximum: Optional[Number] = None
    min_length: Optional[int] = Field(None, ge=0)
    minimum: Optional[Number] = None
    pattern: Optional[str] = None
    read_only: Optional[bool] = None
    schema_type: Optional[Union[str, List[str]]] = Field(None, alias="type")
    title: Optional[str] = None
    write_only: Optional[bool] = None

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @property
    def has_default(self) -> bool:
        # "default": null is a legitimate default, so presence is tracked separately
        return "default" in self.model_fields_set

    @property
    def types(self) -> List[str]:
        if self.schema_type is None:
            return []
        if isinstance(self.schema_type, str):
            return [self.schema_type]
        return list(self.schema_type)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
