"""Base entity class and cordcodec-specific Pydantic configuration.

This module provides the Entity class that all API entities inherit from.
"""

from __future__ import annotations

from typing import ClassVar, TypeVar, Union

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="Entity")


class Entity(BaseModel):
    """Base class for all API entities.

    Fields are declared in wire order; the field's alias (or its name) is the
    JSON key. Every field should carry a zero default so an entity can be
    built from a payload that leaves fields out.

    cordcodec-specific options are configured as ClassVar attributes:

    Example:
        >>> class Reaction(Entity):
        ...     count: int = 0
        ...     me: bool = False
        ...     emoji: Emoji = Field(default_factory=Emoji)
        ...
        ...     codec_specialize: ClassVar[bool] = True

    Attributes:
        codec_specialize: Encode through a generated per-entity function
        codec_fold_keys: Accept keys that only match ignoring case
    """

    model_config = ConfigDict(
        # Build by attribute name as well as by wire key
        populate_by_name=True,
        arbitrary_types_allowed=True,
        validate_assignment=True,
        # Unknown keys are the decoder's business, not the model's
        extra="ignore",
    )

    codec_specialize: ClassVar[bool] = False
    codec_fold_keys: ClassVar[bool] = True

    def to_json(self) -> bytes:
        """Encode this entity to canonical JSON bytes."""
        # Import here to avoid circular dependency
        from ..codec.encoder import encode

        return encode(self)

    @classmethod
    def from_json(cls: type[T], data: Union[bytes, bytearray, memoryview, str]) -> T | None:
        """Decode JSON bytes into a fresh instance (None for a ``null`` document)."""
        from ..codec.decoder import decode

        return decode(cls, data)
