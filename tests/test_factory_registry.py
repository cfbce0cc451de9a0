# Factory Registry Tests
"""Tests for per-localization factory construction and caching."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from cms_delivery.config import Settings
from cms_delivery.factories.cache import CacheAgent
from cms_delivery.factories.factories import (
    BinaryFactory,
    ComponentFactory,
    ComponentPresentationFactory,
    PageFactory,
)
from cms_delivery.factories.registry import FactoryRegistry
from cms_delivery.models.factory_kind import FactoryKind
from cms_delivery.services.overrides import ServiceOverrides


class CountingBuilder:
    """Builder that records how often it runs and returns a fresh object each time."""

    def __init__(self, delay: float = 0.0):
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, localization):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return object()


def _must_not_build(localization):
    raise AssertionError("default construction must not run")


class TestFactoryRegistryCaching:
    """Test caching guarantees of get_factory."""

    def test_single_construction_under_contention(self, localization):
        builder = CountingBuilder(delay=0.05)
        registry = FactoryRegistry(builders={FactoryKind.PAGE: builder})
        barrier = threading.Barrier(16)

        def request():
            barrier.wait()
            return registry.get_factory(FactoryKind.PAGE, localization)

        with ThreadPoolExecutor(max_workers=16) as executor:
            results = list(executor.map(lambda _: request(), range(16)))

        assert builder.calls == 1
        assert all(result is results[0] for result in results)

    def test_per_key_isolation(self, localization, other_localization):
        builder = CountingBuilder()
        registry = FactoryRegistry(builders={FactoryKind.BINARY: builder})

        first = registry.get_factory(FactoryKind.BINARY, localization)
        second = registry.get_factory(FactoryKind.BINARY, other_localization)

        assert first is not second
        assert builder.calls == 2
        assert sorted(registry.cached_ids(FactoryKind.BINARY)) == ["1065", "1080"]

    def test_idempotent(self, localization):
        builder = CountingBuilder()
        registry = FactoryRegistry(builders={FactoryKind.COMPONENT: builder})

        instances = {id(registry.get_factory(FactoryKind.COMPONENT, localization)) for _ in range(5)}

        assert len(instances) == 1
        assert builder.calls == 1

    def test_kinds_are_cached_independently(self, localization):
        page_builder = CountingBuilder()
        binary_builder = CountingBuilder()
        registry = FactoryRegistry(builders={
            FactoryKind.PAGE: page_builder,
            FactoryKind.BINARY: binary_builder,
        })

        page = registry.get_factory(FactoryKind.PAGE, localization)
        binary = registry.get_factory(FactoryKind.BINARY, localization)

        assert page is not binary
        assert registry.cached_ids(FactoryKind.COMPONENT) == []

    def test_registries_do_not_share_state(self, localization):
        builder = CountingBuilder()

        FactoryRegistry(builders={FactoryKind.PAGE: builder}).get_page_factory(localization)
        FactoryRegistry(builders={FactoryKind.PAGE: builder}).get_page_factory(localization)

        assert builder.calls == 2


class TestFactoryRegistryOverrides:
    """Test override precedence and failure handling."""

    def test_override_preempts_construction(self, localization):
        override = object()
        overrides = ServiceOverrides()
        overrides.register(PageFactory, override)
        registry = FactoryRegistry(overrides=overrides, builders={FactoryKind.PAGE: _must_not_build})

        assert registry.get_page_factory(localization) is override
        assert registry.get_page_factory(localization) is override
        assert registry.cached_ids(FactoryKind.PAGE) == ["1065"]

    def test_override_for_other_kind_is_ignored(self, localization):
        overrides = ServiceOverrides()
        overrides.register(BinaryFactory, object())
        builder = CountingBuilder()
        registry = FactoryRegistry(overrides=overrides, builders={FactoryKind.PAGE: builder})

        registry.get_page_factory(localization)

        assert builder.calls == 1

    def test_override_lookup_failure_is_swallowed(self, localization):
        def broken():
            raise RuntimeError("service container unavailable")

        overrides = ServiceOverrides()
        overrides.register_provider(ComponentPresentationFactory, broken)
        builder = CountingBuilder()
        registry = FactoryRegistry(
            overrides=overrides,
            builders={FactoryKind.COMPONENT_PRESENTATION: builder},
        )

        factory = registry.get_component_presentation_factory(localization)

        assert factory is not None
        assert builder.calls == 1

    def test_override_lookup_failure_is_logged_at_debug(self, localization, caplog):
        caplog.set_level(logging.DEBUG, logger="cms_delivery")

        def broken():
            raise RuntimeError("service container unavailable")

        overrides = ServiceOverrides()
        overrides.register_provider(PageFactory, broken)
        registry = FactoryRegistry(overrides=overrides, builders={FactoryKind.PAGE: CountingBuilder()})

        registry.get_page_factory(localization)

        records = [r for r in caplog.records if "Override lookup" in r.getMessage()]
        assert records[0].levelno == logging.DEBUG
        assert records[0].args[0] == "PageFactory"
        assert "service container unavailable" in records[0].getMessage()

    def test_ambient_services_resolve_through_overrides(self):
        overrides = ServiceOverrides()
        custom_settings = Settings(factory_cache_ttl=1)
        custom_logger = logging.getLogger("custom")
        custom_cache = CacheAgent(ttl=1)
        overrides.register(Settings, custom_settings)
        overrides.register(logging.Logger, custom_logger)
        overrides.register(CacheAgent, custom_cache)
        registry = FactoryRegistry(overrides=overrides)

        assert registry.configuration() is custom_settings
        assert registry.logger() is custom_logger
        assert registry.cache_agent() is custom_cache

    def test_ambient_services_default(self):
        settings = Settings(factory_cache_ttl=42)
        registry = FactoryRegistry(settings=settings)

        assert registry.configuration() is settings
        assert registry.cache_agent().ttl == 42
        assert registry.cache_agent() is registry.cache_agent()


class TestFactoryRegistryConstruction:
    """Test the default dependency chains and construction failures."""

    def test_construction_failure_propagates(self, localization):
        attempts = []

        def flaky(loc):
            attempts.append(loc.id)
            if len(attempts) == 1:
                raise ValueError("publication resolver failed")
            return object()

        registry = FactoryRegistry(builders={FactoryKind.PAGE: flaky})

        with pytest.raises(ValueError, match="publication resolver failed"):
            registry.get_page_factory(localization)
        assert registry.cached_ids(FactoryKind.PAGE) == []

        assert registry.get_page_factory(localization) is not None
        assert len(attempts) == 2

    def test_page_factory_chain(self, localization, client_factory):
        registry = FactoryRegistry(client_factory=client_factory)

        page_factory = registry.get_page_factory(localization)

        assert isinstance(page_factory, PageFactory)
        assert page_factory.component_presentation_factory is (
            registry.get_component_presentation_factory(localization)
        )
        assert page_factory.services.publication_resolver.resolve_publication_id() == "5"
        assert page_factory.services.cache_agent is registry.cache_agent()

    def test_component_factory_shares_component_presentation_factory(self, localization, client_factory):
        registry = FactoryRegistry(client_factory=client_factory)

        component_factory = registry.get_component_factory(localization)

        assert isinstance(component_factory, ComponentFactory)
        assert component_factory.component_presentation_factory is (
            registry.get_component_presentation_factory(localization)
        )
        assert registry.cached_ids(FactoryKind.COMPONENT_PRESENTATION) == ["1065"]

    def test_binary_factory_chain(self, localization, client_factory):
        registry = FactoryRegistry(client_factory=client_factory)

        binary_factory = registry.get_binary_factory(localization)

        assert isinstance(binary_factory, BinaryFactory)
        assert binary_factory.provider.localization == localization
        assert binary_factory.provider.client_factory is client_factory

    def test_concurrent_page_and_component_requests(self, localization, client_factory):
        registry = FactoryRegistry(client_factory=client_factory)

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(
                    registry.get_page_factory if i % 2 else registry.get_component_factory,
                    localization,
                )
                for i in range(8)
            ]
            factories = [f.result(timeout=5) for f in futures]

        cp_factory = registry.get_component_presentation_factory(localization)
        assert all(f.component_presentation_factory is cp_factory for f in factories)
