"""Enumerations that tolerate values they do not declare.

Discord keeps adding message, sticker and interaction types. Fields typed with
an ``OpenIntEnum`` accept any integer: undeclared values become cached
pseudo-members named ``UNKNOWN_<value>`` that compare and encode as the raw
integer.
"""

from __future__ import annotations

import enum
from typing import Any, Optional


class OpenIntEnum(enum.IntEnum):
    """Integer enumeration accepting undeclared values.

    Example:
        >>> class Kind(OpenIntEnum):
        ...     A = 1
        >>> Kind(7)
        <Kind.UNKNOWN_7: 7>
        >>> Kind(7) is Kind(7)
        True
    """

    @classmethod
    def _missing_(cls, value: Any) -> Optional[OpenIntEnum]:
        if not isinstance(value, int):
            return None

        member = int.__new__(cls, value)
        member._name_ = f"UNKNOWN_{int(value)}"
        member._value_ = int(value)
        return cls._value2member_map_.setdefault(int(value), member)

    @property
    def is_known(self) -> bool:
        """Whether the value is one of the declared members."""
        return self._name_ in type(self).__members__
