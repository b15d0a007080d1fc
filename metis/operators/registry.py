"""Central registry of operator factories.

Uses a class-level registry pattern for global access without singleton instantiation.
Built-in operators register themselves on import; simulations can then build
operator pipelines from names and keyword parameters.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from metis.errors import ValidationError

logger = logging.getLogger(__name__)


class OperatorRegistry:
    """Name -> operator factory registry.

    Class-level registry: all methods are classmethods for global access.
    """

    _operators: dict[str, Callable[..., Any]] = {}

    @classmethod
    def register(cls, name: str):
        """Decorator to register an operator class or factory.

        Usage:
            @OperatorRegistry.register("my_operator")
            class MyOperator:
                def change(self, state) -> None: ...
        """

        def decorator(factory: Callable[..., Any]) -> Callable[..., Any]:
            if name in cls._operators:
                logger.warning(f"Operator '{name}' already registered, overriding")
            cls._operators[name] = factory
            logger.debug(f"Registered operator: {name}")
            return factory

        return decorator

    @classmethod
    def get(cls, name: str) -> Callable[..., Any] | None:
        """Get a registered operator factory by name."""
        return cls._operators.get(name)

    @classmethod
    def create(cls, name: str, /, **params: Any) -> Any:
        """Instantiate a registered operator.

        `name` is positional-only, so factories may take a `name` parameter
        of their own (statistics operators do).

        Raises:
            ValidationError: If no operator is registered under `name`
        """
        factory = cls._operators.get(name)
        if factory is None:
            raise ValidationError(f"Unknown operator '{name}'")
        return factory(**params)

    @classmethod
    def build_pipeline(cls, specs: list[dict[str, Any]]) -> list[Any]:
        """Build operators from [{"name": ..., "params": {...}}, ...] in order."""
        return [cls.create(spec["name"], **spec.get("params", {})) for spec in specs]

    @classmethod
    def all_operators(cls) -> dict[str, Callable[..., Any]]:
        """Get all registered operator factories."""
        return dict(cls._operators)

    @classmethod
    def clear(cls):
        """Clear all registrations. Useful for testing."""
        cls._operators.clear()
        logger.debug("Cleared all operator registrations")
