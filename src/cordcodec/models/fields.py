"""Field helpers for declaring entity fields.

Codec metadata is stored in the field's ``json_schema_extra`` so it travels
with the Pydantic FieldInfo and is picked up by schema introspection.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

OMIT_EMPTY = "omitempty"


def OmitEmpty(default: Any = None, **kwargs: Any) -> FieldInfo:
    """Create a field that is left out of the encoded object when empty.

    Empty means ``None``, ``False``, ``0``, ``""``, an empty list or a zero
    snowflake. Non-nullable nested entities are never considered empty.

    Args:
        default: Default value (ignored when ``default_factory`` is given)
        **kwargs: Additional Field() arguments (alias, default_factory, description, ...)

    Returns:
        Pydantic FieldInfo suitable for use as a field default.

    Example:
        >>> class Emoji(Entity):
        ...     role_ids: list[RoleID] = OmitEmpty(default_factory=list, alias="roles")
        ...     animated: bool = OmitEmpty(False)
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[OMIT_EMPTY] = True

    if "default_factory" in kwargs:
        return cast(FieldInfo, Field(json_schema_extra=extra, **kwargs))
    return cast(FieldInfo, Field(default, json_schema_extra=extra, **kwargs))


def is_omit_empty(field_info: FieldInfo) -> bool:
    """Whether a field was declared with OmitEmpty()."""
    extra = field_info.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(OMIT_EMPTY, False))
