# cms_delivery/services/overrides.py
"""
Optional service overrides.

Applications register pre-built instances (or lazy providers) for a service
type; the factory registry and the content client factory consult the
override provider before building their defaults.

Example:
    overrides = ServiceOverrides()
    overrides.register(PageFactory, my_page_factory)
    registry = FactoryRegistry(overrides=overrides)
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Protocol, Type, TypeVar

logger = logging.getLogger("cms_delivery.services.overrides")

T = TypeVar("T")


class OverrideProvider(Protocol):
    """Looks up an externally supplied implementation of a service type."""

    def try_resolve(self, service_type: Type[T]) -> Optional[T]:
        """Return the override for ``service_type`` or None when none is registered."""
        ...


class ServiceOverrides:
    """In-memory OverrideProvider keyed by service type."""

    def __init__(self):
        self._instances: Dict[type, Any] = {}
        self._providers: Dict[type, Callable[[], Any]] = {}
        self._lock = threading.Lock()

    def register(self, service_type: type, instance: Any) -> None:
        """Register a pre-built instance for ``service_type``."""
        with self._lock:
            self._providers.pop(service_type, None)
            self._instances[service_type] = instance
        logger.info("Registered override for %s", service_type.__name__)

    def register_provider(self, service_type: type, provider: Callable[[], Any]) -> None:
        """Register a callable invoked on every lookup of ``service_type``."""
        with self._lock:
            self._instances.pop(service_type, None)
            self._providers[service_type] = provider
        logger.info("Registered override provider for %s", service_type.__name__)

    def unregister(self, service_type: type) -> None:
        with self._lock:
            self._instances.pop(service_type, None)
            self._providers.pop(service_type, None)

    def try_resolve(self, service_type: Type[T]) -> Optional[T]:
        with self._lock:
            instance = self._instances.get(service_type)
            provider = self._providers.get(service_type)
        if instance is not None:
            return instance
        if provider is not None:
            return provider()
        return None
