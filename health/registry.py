# ============================================================================
# HEALTH CHECK REGISTRY
# ============================================================================
# STATUS: Infrastructure - Probe plugin registration
# PURPOSE: Register probes and hand them out in declaration order
# ============================================================================
"""
Health Check Registry

Manages registration of probe plugins. Probes are declared once at
process scope and are stateless, so one instance per class is enough.

Usage:
    # Decorator registration
    @register_check(category="database")
    class PostgresCheck(HealthProbe):
        ...

    # Manual registration
    registry = ProbeRegistry()
    registry.register(DnsPortCheck(host="db.internal", port=5432))

    # Get probes for execution
    probes = registry.get_probes_in_order()
"""

import logging
from typing import Dict, List, Optional, Type

from health.core import HealthProbe, ProbeCategory

logger = logging.getLogger(__name__)


class ProbeRegistry:
    """
    Registry for probe plugins.

    Keeps registration order; get_probes_in_order() sorts by priority
    and keeps registration order between equal priorities.
    """

    def __init__(self):
        self._probes: Dict[str, HealthProbe] = {}
        self._initialized = False

    def register(self, probe: HealthProbe) -> None:
        """
        Register a probe instance.

        A probe registered under an existing name replaces it.
        """
        if probe.name in self._probes:
            logger.warning(f"Overwriting health check: {probe.name}")

        self._probes[probe.name] = probe
        logger.debug(
            f"Registered health check: {probe.name} "
            f"(category={probe.category.value}, priority={probe.priority})"
        )

    def register_class(
        self,
        probe_class: Type[HealthProbe],
        **kwargs
    ) -> HealthProbe:
        """Instantiate and register a probe class."""
        instance = probe_class(**kwargs)
        self.register(instance)
        return instance

    def get(self, name: str) -> Optional[HealthProbe]:
        """Get probe by name."""
        return self._probes.get(name)

    def get_all(self) -> List[HealthProbe]:
        """Get all probes in registration order."""
        return list(self._probes.values())

    def get_probes_in_order(self) -> List[HealthProbe]:
        """Get all probes sorted by priority (lower first, stable)."""
        return sorted(self._probes.values(), key=lambda p: p.priority)

    def clear(self) -> None:
        """Remove all registered probes."""
        self._probes.clear()
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if registry has been initialized with probes."""
        return self._initialized

    def mark_initialized(self) -> None:
        """Mark registry as initialized."""
        self._initialized = True

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, name: str) -> bool:
        return name in self._probes


# ============================================================================
# GLOBAL REGISTRY & DECORATOR
# ============================================================================

_registry: Optional[ProbeRegistry] = None


def get_registry() -> ProbeRegistry:
    """Get the global probe registry."""
    global _registry
    if _registry is None:
        _registry = ProbeRegistry()
    return _registry


def register_check(
    category: str = None,
    priority: int = None,
    timeout_seconds: float = None,
):
    """
    Decorator to register a probe class in the global registry.

    Args:
        category: Override category (string or ProbeCategory)
        priority: Override priority (lower is reported first)
        timeout_seconds: Override executor guard budget

    Example:
        @register_check(category="storage")
        class S3BucketCheck(HealthProbe):
            name = "s3"

            async def check(self, settings) -> ProbeResult:
                ...
    """
    def decorator(cls: Type[HealthProbe]) -> Type[HealthProbe]:
        if category is not None:
            if isinstance(category, str):
                cls.category = ProbeCategory(category)
            else:
                cls.category = category

        if priority is not None:
            cls.priority = priority
        elif hasattr(cls, "category"):
            cls.priority = cls.category.default_priority

        if timeout_seconds is not None:
            cls.timeout_seconds = timeout_seconds

        get_registry().register_class(cls)

        return cls

    return decorator


def build_default_registry() -> ProbeRegistry:
    """
    Fresh registry holding the standard probes.

    For callers (and tests) that want isolation from the global registry.
    """
    from health.checks import DEFAULT_PROBES

    registry = ProbeRegistry()
    for probe_class in DEFAULT_PROBES:
        registry.register_class(probe_class)
    registry.mark_initialized()
    return registry


def get_default_registry() -> ProbeRegistry:
    """
    Global registry, with the standard probes loaded on first use.

    FastAPI dependency for the health endpoints, so the report always
    carries the port self-report whether or not the app's lifespan ran.
    Probes registered by other modules are kept.
    """
    registry = get_registry()
    if not registry.is_initialized:
        from health.checks import DEFAULT_PROBES

        for probe_class in DEFAULT_PROBES:
            if probe_class.name not in registry:
                registry.register_class(probe_class)
        registry.mark_initialized()
        logger.info(f"Health checks initialized ({len(registry)} checks registered)")
    return registry


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeRegistry",
    "get_registry",
    "register_check",
    "build_default_registry",
    "get_default_registry",
]
