"""Entity inspection and payload checking CLI commands."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from .. import discord
from ..codec.decoder import decode
from ..codec.encoder import encode
from ..codec.schema import EntitySchema, FieldKind, FieldSchema
from ..models.base import Entity


def inspect_file(file_path: Path) -> None:
    """Print the field table of every Entity class in a Python file.

    Args:
        file_path: Path to Python file containing entity definitions
    """
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    entity_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        # Only classes defined in this file, not imported ones
        if issubclass(obj, Entity) and obj is not Entity and obj.__module__ == "user_module"
    ]

    if not entity_classes:
        print(f"No Entity classes found in {file_path}")
        return

    print(f"{len(entity_classes)} entit{'ies' if len(entity_classes) != 1 else 'y'} loaded.")
    print()

    for entity_class in entity_classes:
        inspect_entity_class(entity_class)


_NAMED_KINDS = (FieldKind.ENTITY, FieldKind.SNOWFLAKE, FieldKind.INT_ENUM, FieldKind.STR_ENUM)


def _describe_kind(field_schema: FieldSchema) -> str:
    if field_schema.item is not None:
        return f"list[{_describe_kind(field_schema.item)}]"
    description = field_schema.kind.value
    if field_schema.kind in _NAMED_KINDS:
        description += f" {field_schema.python_type.__name__}"
    if field_schema.nullable:
        description += "?"
    return description


def inspect_entity_class(entity_class: type[Entity]) -> None:
    """Print the wire key, kind and omission policy of each field.

    Args:
        entity_class: Entity class to inspect
    """
    schema = EntitySchema.for_model(entity_class)

    print(f"{'=' * 19} {entity_class.__name__} {'=' * 19}")
    options = []
    if getattr(entity_class, "codec_specialize", False):
        options.append("generated encoder")
    if not schema.fold_keys:
        options.append("exact keys only")
    if options:
        print(f"({', '.join(options)})")

    for i, field_schema in enumerate(schema.fields, 1):
        field_desc = f"{i}. {field_schema.key}"
        kind = _describe_kind(field_schema)
        dots = "." * max(1, 40 - len(field_desc) - len(kind))
        policy = "omitempty" if field_schema.omit_empty else "always"
        print(f"        {field_desc}{dots}{kind} [{policy}]")

    print()


def check_payload(entity_name: str, data: bytes) -> str:
    """Decode a payload as a built-in Discord entity and re-encode it.

    Args:
        entity_name: Class name exported by ``cordcodec.discord``
        data: JSON payload

    Returns:
        Canonical encoding of the decoded entity

    Raises:
        KeyError: If no Discord entity has that name
        DecodeError: If the payload does not decode
    """
    entity_class = getattr(discord, entity_name, None)
    if not (inspect.isclass(entity_class) and issubclass(entity_class, Entity)):
        raise KeyError(f"unknown entity {entity_name!r}, choose from: {', '.join(_entity_names())}")

    entity = decode(entity_class, data)
    return encode(entity).decode("utf-8")


def _entity_names() -> list[str]:
    names = []
    for name in discord.__all__:
        obj = getattr(discord, name)
        if inspect.isclass(obj) and issubclass(obj, Entity):
            names.append(name)
    return sorted(names)
