"""Concurrent key/value store that holds its values weakly.

The store never keeps a computed value alive on its own. When the last
outside reference to a value disappears, the value's weak-reference
callback removes the matching slot, but only if the key still maps to that
same slot, so a fresher entry is never clobbered by an older one's
finalization.

Builtins such as ``int``, ``str`` and ``tuple`` cannot be weakly
referenced. With ``strong_fallback`` enabled they are pinned in a strong
slot and live as long as the store; otherwise storing one raises
:class:`UnreferenceableValueError`.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, override
import weakref

from ...application.ports.caching import ValueStorePort
from ...domain.entities.option import NOTHING, Option
from ...domain.exceptions import UnreferenceableValueError
from .atomic_map import AtomicMap

if TYPE_CHECKING:
    from collections.abc import Callable


class _Slot[V]:
    __slots__ = ()

    def resolve(self) -> Option[V]:
        raise NotImplementedError

    @property
    def is_weak(self) -> bool:
        return False


class _StrongSlot[V](_Slot[V]):
    __slots__ = ("_value",)

    def __init__(self, value: V) -> None:
        self._value = value

    @override
    def resolve(self) -> Option[V]:
        return Option.some(self._value)


class _WeakSlot[V](_Slot[V]):
    __slots__ = ("_ref",)

    def __init__(self) -> None:
        self._ref: weakref.ref[V] | None = None

    def bind(self, ref: weakref.ref[V]) -> None:
        self._ref = ref

    @override
    def resolve(self) -> Option[V]:
        target = self._ref() if self._ref is not None else None
        if target is None:
            return NOTHING
        return Option.some(target)

    @property
    @override
    def is_weak(self) -> bool:
        return True


class WeakValueStore[K: Hashable, V](ValueStorePort[K, V]):
    def __init__(
        self,
        *,
        strong_fallback: bool = True,
        on_evict: Callable[[K], None] | None = None,
    ) -> None:
        super().__init__()
        self._slots: AtomicMap[K, _Slot[V]] = AtomicMap()
        self._strong_fallback = strong_fallback
        self._on_evict = on_evict

    @override
    def try_get(self, key: K) -> Option[V]:
        """Look up ``key``.

        Returns Nothing both for keys never stored and for keys whose value
        was already reclaimed.
        """
        slot = self._slots.get(key)
        if slot is None:
            return NOTHING
        return slot.resolve()

    @override
    def get_or_add(self, key: K, compute: Callable[[K], V]) -> V:
        """Run ``compute(key)`` and store the result, replacing any slot for ``key``.

        Callers serialize on the key before calling this; nothing is stored
        when ``compute`` raises.
        """
        value = compute(key)
        self._slots.add_or_replace(key, self._make_slot(key, value))
        return value

    @override
    def remove(self, key: K) -> bool:
        return self._slots.remove(key)

    @override
    def clear(self) -> None:
        self._slots.clear()

    def keys(self) -> list[K]:
        return self._slots.keys()

    def is_pinned(self, key: K) -> bool:
        slot = self._slots.get(key)
        return slot is not None and not slot.is_weak

    @override
    def __len__(self) -> int:
        return len(self._slots)

    def _make_slot(self, key: K, value: V) -> _Slot[V]:
        slot: _WeakSlot[V] = _WeakSlot()
        store_ref = weakref.ref(self)

        def _reclaimed(_ref: weakref.ref[V]) -> None:
            store = store_ref()
            if store is not None:
                store._evict(key, slot)

        try:
            slot.bind(weakref.ref(value, _reclaimed))
        except TypeError:
            if not self._strong_fallback:
                raise UnreferenceableValueError(key, value) from None
            return _StrongSlot(value)
        return slot

    def _evict(self, key: K, slot: _Slot[V]) -> None:
        if self._slots.remove_if(key, slot) and self._on_evict is not None:
            self._on_evict(key)
