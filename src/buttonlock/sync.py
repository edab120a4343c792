"""Keep a rendering engine's rule set in step with a binding registry.

The engine is an external collaborator described by the
:class:`RenderingEngine` protocol.  It owns the per-character annotations and
evaluates every registered rule on each re-render.  Rules are never edited in
place: updating a binding always unregisters the old rule and registers a new
one, and the engine tracks rules by identity.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .binding import BASE_MANAGED, CLICKABLE, REAR_NONSTICKY, FacePolicy, PatternBinding
from .utils.logging import get_logger

if TYPE_CHECKING:
    from .registry import BindingRegistry

__all__ = ["HighlightRule", "RenderingEngine", "HighlightSync"]

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True, eq=False)
class HighlightRule:
    """A rule registered with a rendering engine.

    Rules compare by identity so an engine can hold two rules with the same
    pattern and still remove exactly the one it was handed.
    """

    pattern: str
    grouping: int
    properties: Mapping[str, Any]
    override_policy: FacePolicy


@runtime_checkable
class RenderingEngine(Protocol):
    """Protocol for highlighting engines that materialize annotations."""

    @property
    def is_active(self) -> bool:
        """Whether the engine is currently active for its document."""

        ...

    @property
    def rules(self) -> tuple[HighlightRule, ...]:
        ...

    @property
    def unfontify_is_default(self) -> bool:
        """``False`` when a custom routine replaced the default clearing pass."""

        ...

    def register_rule(
        self,
        pattern: str,
        grouping: int,
        properties: Mapping[str, Any],
        override_policy: FacePolicy,
    ) -> HighlightRule:
        ...

    def unregister_rule(self, rule: HighlightRule) -> bool:
        ...

    def add_managed_properties(self, keys: Iterable[str]) -> None:
        ...

    def remove_managed_properties(self, keys: Iterable[str]) -> None:
        ...

    def request_rerender(self, start: int | None = None, end: int | None = None) -> None:
        ...

    def default_unfontify(self, start: int | None = None, end: int | None = None) -> None:
        """Strip every managed annotation in ``[start, end)``."""

        ...


class HighlightSync:
    """Adapter pushing registry changes to a :class:`RenderingEngine`."""

    def __init__(self, engine: RenderingEngine) -> None:
        self.engine = engine
        self._rules: dict[PatternBinding, HighlightRule] = {}
        self._managed: set[str] = set()

    def __repr__(self) -> str:
        return f"HighlightSync(rules={len(self._rules)})"

    def rule_for(self, binding: PatternBinding) -> HighlightRule | None:
        return self._rules.get(binding)

    # ------------------------------------------------------------------
    # Whole-registry reconciliation
    # ------------------------------------------------------------------

    def activate(self, registry: BindingRegistry) -> None:
        """Register every binding of ``registry`` and attach to it."""

        for binding in registry:
            if binding not in self._rules:
                self.tell(binding)
        registry.attach(self)
        logger.debug("activated %d bindings", len(registry))

    def deactivate(self, registry: BindingRegistry) -> None:
        """Unregister every binding and any stray clickable rule."""

        for binding in list(registry):
            self.forget(binding)
        for binding in list(self._rules):
            self.forget(binding)
        stray = [rule for rule in self.engine.rules if rule.properties.get(CLICKABLE)]
        for rule in stray:
            self.engine.unregister_rule(rule)

        # Strip button annotations while their keys are still managed; once
        # withdrawn, later renders would never clear them.
        keys = set(BASE_MANAGED) | {REAR_NONSTICKY}
        for rule in stray:
            keys.update(rule.properties)
        self.engine.add_managed_properties(keys)
        self._managed.update(keys)
        self.engine.default_unfontify()
        self.request_render()

        if self._managed:
            self.engine.remove_managed_properties(self._managed)
            self._managed.clear()
        registry.detach()
        logger.debug("deactivated registry, removed %d stray rules", len(stray))

    # ------------------------------------------------------------------
    # Single-binding reconciliation
    # ------------------------------------------------------------------

    def tell(self, binding: PatternBinding) -> HighlightRule:
        """Register ``binding``'s rule and mark its annotation keys as managed."""

        rule = self.engine.register_rule(
            binding.pattern,
            binding.grouping,
            binding.properties,
            binding.face_policy,
        )
        self._rules[binding] = rule
        keys = binding.managed_properties
        self.engine.add_managed_properties(keys)
        self._managed.update(keys)
        return rule

    def forget(self, binding: PatternBinding) -> bool:
        """Unregister ``binding``'s rule; ``False`` if it had none."""

        rule = self._rules.pop(binding, None)
        if rule is None:
            return False
        return self.engine.unregister_rule(rule)

    def sync_one(self, binding: PatternBinding) -> HighlightRule:
        """Replace ``binding``'s rule with a freshly registered one."""

        self.forget(binding)
        return self.tell(binding)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def request_render(self) -> bool:
        """Ask the engine to re-render; never activates an inactive engine."""

        if not self.engine.is_active:
            return False
        self.engine.request_rerender()
        return True

    def maybe_unbuttonify(self) -> bool:
        """Run the default clearing pass when the engine replaced it.

        Engines with a custom unfontify routine leave stale button annotations
        behind, so they are stripped explicitly before re-rendering.
        """

        if not self.engine.is_active or self.engine.unfontify_is_default:
            return False
        self.engine.default_unfontify()
        return True
