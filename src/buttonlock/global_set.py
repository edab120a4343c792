"""Process-wide replay list of binding specifications.

Global bindings are stored as :class:`BindingSpec` values, the argument shape
of :meth:`BindingRegistry.set`.  Each newly activated registry receives a
snapshot of the list; later changes never reach registries that are already
active.

A module level :class:`GlobalBindingSet` is created empty at import time and
exposed through ``register_global_binding`` and friends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .binding import PatternBinding
from .events import Handler
from .utils.logging import get_logger

if TYPE_CHECKING:
    from .registry import BindingRegistry

__all__ = [
    "BindingSpec",
    "GlobalBindingSet",
    "global_bindings",
    "register_global_binding",
    "unregister_global_binding",
    "pop_global_binding",
    "clear_global_bindings",
]

logger = get_logger(__name__)


@dataclass(slots=True)
class BindingSpec:
    """Arguments for one :meth:`BindingRegistry.set` call.

    Specs compare by value across pattern, action and options.
    """

    pattern: str
    action: Handler
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, pattern: str, action: Handler, **options: Any) -> "BindingSpec":
        return cls(pattern, action, dict(options))

    def apply(self, registry: BindingRegistry) -> PatternBinding | None:
        return registry.set(self.pattern, self.action, **self.options)


class GlobalBindingSet:
    """Ordered list of specs replayed into each activated registry."""

    def __init__(self) -> None:
        self._specs: list[BindingSpec] = []

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, spec: object) -> bool:
        return spec in self._specs

    def snapshot(self) -> tuple[BindingSpec, ...]:
        return tuple(self._specs)

    def register(self, spec: BindingSpec) -> BindingSpec:
        """Append ``spec`` unless an equal spec is already present."""

        if spec not in self._specs:
            self._specs.append(spec)
        return spec

    def unregister(self, spec: BindingSpec) -> BindingSpec | None:
        """Remove the first spec equal to ``spec``."""

        for idx, candidate in enumerate(self._specs):
            if candidate == spec:
                return self._specs.pop(idx)
        return None

    def pop(self, from_start: bool = False) -> int | None:
        """Drop the newest spec (or the oldest with ``from_start``).

        Returns ``1`` when a spec was removed, ``None`` when the set is empty.
        """

        if not self._specs:
            return None
        self._specs.pop(0 if from_start else -1)
        return 1

    def clear(self) -> None:
        self._specs.clear()

    def replay_into(self, registry: BindingRegistry) -> list[PatternBinding | None]:
        """Call ``registry.set`` once per spec, in stored order."""

        results = [spec.apply(registry) for spec in self.snapshot()]
        logger.debug("replayed %d global bindings", len(results))
        return results


_GLOBAL = GlobalBindingSet()


def global_bindings() -> GlobalBindingSet:
    """Return the process-wide :class:`GlobalBindingSet`."""

    return _GLOBAL


def register_global_binding(pattern: str, action: Handler, **options: Any) -> BindingSpec:
    """Register a binding applied to every subsequently activated document."""

    return _GLOBAL.register(BindingSpec.of(pattern, action, **options))


def unregister_global_binding(pattern: str, action: Handler, **options: Any) -> BindingSpec | None:
    """Remove a global binding registered with exactly these arguments."""

    return _GLOBAL.unregister(BindingSpec.of(pattern, action, **options))


def pop_global_binding(from_start: bool = False) -> int | None:
    return _GLOBAL.pop(from_start)


def clear_global_bindings() -> None:
    _GLOBAL.clear()
