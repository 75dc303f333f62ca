"""Generated per-entity encoders.

For hot entity types the schema loop of the generic encoder can be replaced
by a function generated once from the entity's schema. The generated code
writes each field in declaration order with its omission check unrolled,
and inlines boolean fields as pre-rendered ``"key":true,`` byte strings.
Output is byte-identical to the generic encoder.
"""

from __future__ import annotations

__all__: typing.Sequence[str] = ["compile_encoder", "specialize"]

import logging
import typing

from pydantic import BaseModel

from .encoder import _OBJECT_CLOSE, _OBJECT_OPEN, _SPECIALIZED, EntityEncoder, write_value
from .schema import EntitySchema, FieldKind, FieldSchema

ModelT = typing.TypeVar("ModelT", bound=typing.Type[BaseModel])

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("cordcodec.specialize")


def _field_lines(index: int, field_schema: FieldSchema) -> typing.List[str]:
    generic = [
        f"  write(KEY{index})",
        f"  write_value(buf, FIELD{index}, value)",
        "  write(b',')",
    ]
    lines = [f"value = entity.{field_schema.name}"]
    omit_empty = field_schema.omit_empty

    if field_schema.kind is FieldKind.BOOL:
        lines.append(f"if value is True: write(TRUE{index})")
        if omit_empty and not field_schema.nullable:
            lines.append("elif value is False: pass")
        else:
            lines.append(f"elif value is False: write(FALSE{index})")
        lines.append("elif value is not None:" if omit_empty else "else:")
        return lines + generic

    if not omit_empty:
        return lines + [line.strip() for line in generic]

    lines.append("if value is not None:" if field_schema.presence_only else "if value:")
    return lines + generic


def compile_encoder(model_class: typing.Type[BaseModel]) -> EntityEncoder:
    """Generate, cache and return the encoder function of an entity class.

    Args:
        model_class: Entity class to specialize

    Returns:
        Function writing one instance into a Buffer
    """
    encoder = _SPECIALIZED.get(model_class)
    if encoder is not None:
        return encoder

    schema = EntitySchema.for_model(model_class)
    globals_: typing.Dict[str, typing.Any] = {
        "OPEN": _OBJECT_OPEN,
        "CLOSE": _OBJECT_CLOSE,
        "write_value": write_value,
    }
    body = ["write = buf.write", "write(OPEN)"]

    for index, field_schema in enumerate(schema.fields):
        globals_[f"FIELD{index}"] = field_schema
        globals_[f"KEY{index}"] = field_schema.encoded_key
        if field_schema.kind is FieldKind.BOOL:
            globals_[f"TRUE{index}"] = field_schema.encoded_key + b"true,"
            globals_[f"FALSE{index}"] = field_schema.encoded_key + b"false,"

        body.extend(_field_lines(index, field_schema))

    body.extend(["buf.rewind(1)", "buf.write_byte(CLOSE)"])
    function_name = f"encode_{model_class.__name__}"
    code = f"def {function_name}(buf, entity):\n  " + "\n  ".join(body)
    _LOGGER.debug("generating json encode method for %r\n  %r", model_class, code)
    exec(code, globals_)

    encoder = typing.cast(EntityEncoder, globals_[function_name])
    _SPECIALIZED[model_class] = encoder
    return encoder


def specialize(model_class: ModelT) -> ModelT:
    """Class decorator opting an entity into a generated encoder.

    Example:
        >>> @specialize
        ... class Reaction(Entity):
        ...     count: int = 0
        ...     me: bool = False
    """
    model_class.codec_specialize = True  # type: ignore[attr-defined]
    compile_encoder(model_class)
    return model_class
