"""Schema introspection for entity models.

This module analyzes Pydantic models and extracts the codec-relevant
information for each field: wire key, semantic kind, nullability and
omission policy. The resulting tables are immutable and cached per model, so
they can be read concurrently by any number of decode/encode calls.
"""

from __future__ import annotations

import datetime
import enum
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.fields import is_omit_empty
from ..models.snowflake import Snowflake
from .buffer import quote
from .keys import KeyMatcher

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("cordcodec.schema")


class FieldKind(enum.Enum):
    """Semantic type of a field on the wire."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    SNOWFLAKE = "snowflake"
    DATETIME = "datetime"
    INT_ENUM = "int_enum"
    STR_ENUM = "str_enum"
    ENTITY = "entity"
    LIST = "list"


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Attribute name on the model
        key: Wire key
        kind: Semantic kind
        python_type: Concrete type (element type for lists is in ``item``)
        nullable: Whether the field is Optional (null decodes to None)
        omit_empty: Whether the encoder leaves the field out when empty
        item: Element schema for list fields
        encoded_key: Pre-rendered ``"key":`` bytes written by encoders
    """

    name: str
    key: str
    kind: FieldKind
    python_type: Any
    nullable: bool
    omit_empty: bool
    item: Optional[FieldSchema]
    encoded_key: bytes

    @property
    def key_bytes(self) -> bytes:
        return self.key.encode("utf-8")

    def is_empty(self, value: Any) -> bool:
        """Whether a value counts as empty for the omission policy."""
        if value is None:
            return True
        if self.presence_only:
            return False
        return not value

    @property
    def presence_only(self) -> bool:
        """Whether only None counts as empty (entities and nullable scalars).

        Zero identifiers stay empty when nullable, since zero is the unset
        snowflake and is written as ``null`` like None.
        """
        if self.kind is FieldKind.ENTITY:
            return True
        return self.nullable and self.kind not in (FieldKind.LIST, FieldKind.SNOWFLAKE)


_SCALAR_KINDS: Tuple[Tuple[type, FieldKind], ...] = (
    (int, FieldKind.INT),
    (float, FieldKind.FLOAT),
    (str, FieldKind.STRING),
    (datetime.datetime, FieldKind.DATETIME),
)


def _unwrap_optional(name: str, annotation: Any) -> Tuple[bool, Any]:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(non_none_args) != 1:
            raise SchemaError(f"Field {name}: complex Union types not supported")
        return True, non_none_args[0]
    return False, annotation


def _scalar_kind(name: str, annotation: Any) -> FieldKind:
    if not isinstance(annotation, type):
        raise SchemaError(f"Field {name}: unsupported type {annotation!r}")

    # bool before int, snowflake and enums before their int/str bases
    if annotation is bool:
        return FieldKind.BOOL
    if issubclass(annotation, Snowflake):
        return FieldKind.SNOWFLAKE
    if issubclass(annotation, enum.Enum):
        if issubclass(annotation, int):
            return FieldKind.INT_ENUM
        if issubclass(annotation, str):
            return FieldKind.STR_ENUM
        raise SchemaError(f"Field {name}: enum {annotation.__name__} must be int- or str-valued")
    if issubclass(annotation, BaseModel):
        return FieldKind.ENTITY

    for base, kind in _SCALAR_KINDS:
        if annotation is base:
            return kind

    raise SchemaError(
        f"Field {name}: unsupported type {annotation.__name__}. "
        f"Supported: bool, int, float, str, datetime, Snowflake, int/str enums, entities and lists of those."
    )


def _build_field(name: str, key: str, annotation: Any, omit_empty: bool) -> FieldSchema:
    nullable, annotation = _unwrap_optional(name, annotation)

    item = None
    if get_origin(annotation) is list or annotation is list:
        args = get_args(annotation)
        if not args:
            raise SchemaError(f"Field {name}: list fields need an element type")
        item = _build_field(f"{name}[]", key, args[0], omit_empty=False)
        kind = FieldKind.LIST
        python_type: Any = list
    else:
        kind = _scalar_kind(name, annotation)
        python_type = annotation

    return FieldSchema(
        name=name,
        key=key,
        kind=kind,
        python_type=python_type,
        nullable=nullable,
        omit_empty=omit_empty,
        item=item,
        encoded_key=quote(key) + b":",
    )


class EntitySchema:
    """Schema information for an entire entity.

    This class introspects a Pydantic model and extracts an ordered field
    table and a wire-key matcher. Use ``for_model`` to get the shared cached
    instance.

    Example:
        >>> schema = EntitySchema.for_model(Emoji)
        >>> [field.key for field in schema.fields]
        ['id', 'name', 'roles', 'user', 'require_colons', 'managed', 'animated', 'available']
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect
        """
        self.model_class = model_class
        self.fold_keys: bool = getattr(model_class, "codec_fold_keys", True)
        self.fields: Tuple[FieldSchema, ...] = tuple(self._introspect())
        self.keys = KeyMatcher((field.key_bytes, index) for index, field in enumerate(self.fields))

        if len(self.keys) != len(self.fields):
            raise SchemaError(f"{model_class.__name__}: two fields share a wire key")

    @classmethod
    def for_model(cls, model_class: Type[BaseModel]) -> EntitySchema:
        """Get the cached schema of a model, building it on first use.

        Args:
            model_class: Pydantic model class

        Returns:
            EntitySchema instance
        """
        schema = _SCHEMAS.get(model_class)
        if schema is None:
            schema = cls(model_class)
            _SCHEMAS[model_class] = schema
            _LOGGER.debug("built schema for %r with %d fields", model_class, len(schema.fields))
        return schema

    def _introspect(self) -> list[FieldSchema]:
        """Introspect the model and build field schemas in declaration order."""
        if not getattr(self.model_class, "__pydantic_complete__", True):
            # resolves forward and self references
            self.model_class.model_rebuild()

        return [
            self._extract_field_schema(field_name, field_info)
            for field_name, field_info in self.model_class.model_fields.items()
        ]

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with extracted information
        """
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        key = field_info.alias or name
        return _build_field(name, key, annotation, is_omit_empty(field_info))

    def __repr__(self) -> str:
        return f"EntitySchema({self.model_class.__name__}, fields={len(self.fields)})"


# Shared read-only after insertion; rebuilding a missing entry is idempotent
_SCHEMAS: dict[type, EntitySchema] = {}
