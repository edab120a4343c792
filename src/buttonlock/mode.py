"""Per-document activation of the button registry.

``ButtonLockMode`` wires the pieces together for one document: enabling it
creates an empty :class:`BindingRegistry`, replays the global bindings into
it and registers the result with the rendering engine; disabling it removes
every binding and withdraws all button rules from the engine.  No binding
survives a disable.
"""

from __future__ import annotations

from .config import ConfigModel, default_config
from .global_set import GlobalBindingSet, global_bindings
from .registry import BindingRegistry
from .sync import HighlightSync, RenderingEngine
from .utils.logging import get_logger

__all__ = ["ButtonLockMode"]

logger = get_logger(__name__)


class ButtonLockMode:
    """Button mode state of a single document."""

    def __init__(
        self,
        engine: RenderingEngine,
        *,
        config: ConfigModel | None = None,
        global_set: GlobalBindingSet | None = None,
    ) -> None:
        self.engine = engine
        self.config = config if config is not None else default_config()
        self.global_set = global_set if global_set is not None else global_bindings()
        self.sync = HighlightSync(engine)
        self.registry: BindingRegistry | None = None

    @property
    def enabled(self) -> bool:
        return self.registry is not None

    def enable(self) -> BindingRegistry:
        """Activate the mode, returning the fresh registry.

        Enabling an already enabled mode starts over with a new registry.
        """

        if self.registry is not None:
            self.disable()
        registry = BindingRegistry(self.config)
        self.global_set.replay_into(registry)
        self.sync.activate(registry)
        self.sync.request_render()
        self.registry = registry
        logger.debug("button mode enabled with %d bindings", len(registry))
        return registry

    def disable(self) -> int:
        """Deactivate the mode and return the number of bindings dropped."""

        registry = self.registry
        if registry is None:
            return 0
        count = registry.clear_all()
        self.sync.deactivate(registry)
        self.registry = None
        logger.debug("button mode disabled, dropped %d bindings", count)
        return count
