"""
Unit Tests: ReactiveWrappers registry
"""

import pytest

from codegraph_reactive import (
    ConfigurationError,
    NormalizationConfig,
    ReactiveLibrary,
    ReactiveWrappers,
    TypeNormalizer,
    WrapperRegistry,
)
from codegraph_reactive.config import ReactiveSettings


class TestAvailability:
    def test_available_with_any_library(self, asyncio_only):
        assert asyncio_only.is_available() is True

    def test_unavailable_without_libraries(self, unavailable_registry):
        assert unavailable_registry.is_available() is False
        assert unavailable_registry.supports("collections.abc.AsyncIterator") is False

    def test_unavailable_when_no_probe_succeeds(self):
        registry = ReactiveWrappers(probe=lambda module: False)

        assert registry.is_available() is False

    def test_extra_types_make_registry_available(self):
        registry = ReactiveWrappers(libraries=[], extra_types=["myapp.StreamOf"])

        assert registry.is_available() is True
        assert registry.supports("myapp.StreamOf[User]") is True

    def test_probe_receives_module_names(self):
        probed: list[str] = []

        def probe(module: str) -> bool:
            probed.append(module)
            return True

        ReactiveWrappers(probe=probe)

        assert probed == ["asyncio", "concurrent.futures", "reactivex", "rx"]

    def test_default_probe_finds_standard_library(self):
        registry = ReactiveWrappers(libraries=[ReactiveLibrary.ASYNCIO, ReactiveLibrary.CONCURRENT_FUTURES])

        assert all(status.available for status in registry.describe())


class TestSupports:
    @pytest.mark.parametrize(
        "type_id",
        [
            "collections.abc.Awaitable",
            "collections.abc.Coroutine",
            "collections.abc.AsyncIterator",
            "typing.AsyncIterable[int]",
            "collections.abc.AsyncGenerator",
            "asyncio.Future",
            "_asyncio.Task",
            "concurrent.futures._base.Future",
        ],
    )
    def test_standard_library_wrappers(self, asyncio_only, type_id):
        assert asyncio_only.supports(type_id) is True

    @pytest.mark.parametrize("type_id", ["reactivex.Observable", "rx.Observable", "rx.subject.Subject"])
    def test_uninstalled_library_wrappers_are_not_supported(self, asyncio_only, type_id):
        assert asyncio_only.supports(type_id) is False

    def test_installed_library_wrappers_are_supported(self, registry):
        assert registry.supports("reactivex.observable.observable.Observable") is True
        assert registry.supports("rx.Observable") is True

    @pytest.mark.parametrize("type_id", ["int", "None", "typing.Any", "typing.Union", "collections.abc.Iterator", ""])
    def test_plain_types_are_not_wrappers(self, registry, type_id):
        assert registry.supports(type_id) is False

    def test_disabled_library(self, all_available):
        registry = ReactiveWrappers(libraries=[ReactiveLibrary.CONCURRENT_FUTURES], probe=all_available)

        assert registry.supports("concurrent.futures.Future") is True
        assert registry.supports("asyncio.Future") is False

    def test_custom_normalizer_applies_to_builtin_wrappers(self, all_available):
        normalizer = TypeNormalizer(NormalizationConfig(strip_packages=True))
        registry = ReactiveWrappers(normalizer=normalizer, probe=all_available)

        assert registry.supports("collections.abc.AsyncIterator") is True
        assert registry.supports("AsyncIterator[int]") is True
        assert "AsyncIterator" in registry.supported_types

    def test_custom_alias_target(self, all_available):
        normalizer = TypeNormalizer().add_alias("collections.abc.AsyncIterator", "myapp.Stream")
        registry = ReactiveWrappers(normalizer=normalizer, probe=all_available)

        assert registry.supports("collections.abc.AsyncIterator") is True
        assert registry.supports("myapp.Stream") is True
        assert "collections.abc.AsyncIterator" not in registry.supported_types


class TestRegistryContract:
    def test_is_wrapper_registry(self, registry):
        assert isinstance(registry, WrapperRegistry)

    def test_custom_registry_satisfies_protocol(self):
        class NameRegistry:
            def is_available(self) -> bool:
                return True

            def supports(self, type_id: str) -> bool:
                return type_id.endswith("Stream")

        assert isinstance(NameRegistry(), WrapperRegistry)

    def test_describe(self, asyncio_only):
        statuses = {status.library: status for status in asyncio_only.describe()}

        assert statuses[ReactiveLibrary.ASYNCIO].available is True
        assert statuses[ReactiveLibrary.REACTIVEX].available is False
        assert "asyncio.Future" in statuses[ReactiveLibrary.ASYNCIO].wrapper_types


class TestFromSettings:
    def test_disabled_libraries(self):
        settings = ReactiveSettings(disabled_libraries=["asyncio", "Concurrent-Futures"])

        registry = ReactiveWrappers.from_settings(settings)

        libraries = [status.library for status in registry.describe()]
        assert ReactiveLibrary.ASYNCIO not in libraries
        assert ReactiveLibrary.CONCURRENT_FUTURES not in libraries
        assert registry.supports("asyncio.Future") is False

    def test_extra_wrapper_types(self):
        settings = ReactiveSettings(extra_wrapper_types=["myapp.Stream"])

        assert ReactiveWrappers.from_settings(settings).supports("myapp.Stream") is True

    def test_unknown_library_raises(self):
        settings = ReactiveSettings(disabled_libraries=["trio"])

        with pytest.raises(ConfigurationError) as exc_info:
            ReactiveWrappers.from_settings(settings)

        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert exc_info.value.context["value"] == "trio"
