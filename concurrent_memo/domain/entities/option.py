"""Optional value used by cache lookups.

A lookup either finds a value or it does not; ``None`` is a legitimate
cached result, so presence is tracked separately from the payload.

Example:
    >>> found = Option.some(9)
    >>> found.match(lambda v: v * 2, lambda: 0)
    18
    >>> NOTHING.value_or(-1)
    -1
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class Option[T]:
    _value: T | None = None
    is_present: bool = False

    @classmethod
    def some(cls, value: T) -> Option[T]:
        return cls(value, True)

    @classmethod
    def none(cls) -> Option[T]:
        return NOTHING

    @property
    def value(self) -> T:
        """Return the held value.

        Raises:
            LookupError: If the option is empty.
        """
        if not self.is_present:
            raise LookupError("Option has no value")
        return self._value  # type: ignore[return-value]

    def value_or(self, default: T) -> T:
        return self._value if self.is_present else default  # type: ignore[return-value]

    def match[R](self, on_some: Callable[[T], R], on_none: Callable[[], R]) -> R:
        if self.is_present:
            return on_some(self._value)  # type: ignore[arg-type]
        return on_none()

    def __bool__(self) -> bool:
        return self.is_present

    def __repr__(self) -> str:
        if self.is_present:
            return f"Some({self._value!r})"
        return "Nothing"


NOTHING: Option[Any] = Option()
