"""
Unit Tests: Repository type detection on interface classes
"""

import pytest
from sample_repositories import (
    AsyncUserRepository,
    CallbackUserRepository,
    DefaultCallbackUserRepository,
    DerivedRepository,
    EmptyRepository,
    OptionalStreamRepository,
    SnapshotUserRepository,
    StaticRepository,
    StreamingUserRepository,
    TracedUserRepository,
    UserRepository,
)

from codegraph_reactive import (
    InvalidInterfaceError,
    ReactiveDetector,
    ReactiveWrappers,
    RepositoryType,
    detect_repository_type,
    is_reactive_repository,
)


class TestDetectRepositoryType:
    @pytest.mark.parametrize(
        "interface,expected",
        [
            (UserRepository, RepositoryType.IMPERATIVE),
            (StreamingUserRepository, RepositoryType.REACTIVE),
            (CallbackUserRepository, RepositoryType.REACTIVE),
            (AsyncUserRepository, RepositoryType.REACTIVE),
            (DerivedRepository, RepositoryType.REACTIVE),
            (StaticRepository, RepositoryType.REACTIVE),
            (EmptyRepository, RepositoryType.IMPERATIVE),
            (TracedUserRepository, RepositoryType.REACTIVE),
            (DefaultCallbackUserRepository, RepositoryType.REACTIVE),
            (SnapshotUserRepository, RepositoryType.IMPERATIVE),
        ],
    )
    def test_classification(self, interface, expected, registry):
        assert detect_repository_type(interface, registry) is expected

    def test_optional_wrapper_is_not_inspected(self, registry):
        """Optional[AsyncIterator[...]] is a Union: type arguments are not inspected."""
        assert detect_repository_type(OptionalStreamRepository, registry) is RepositoryType.IMPERATIVE

    def test_inherited_methods_can_be_excluded(self, registry):
        assert is_reactive_repository(DerivedRepository, registry, include_inherited=True) is True
        assert is_reactive_repository(DerivedRepository, registry, include_inherited=False) is False

    def test_unavailable_registry_skips_introspection(self, unavailable_registry, monkeypatch):
        detector = ReactiveDetector(unavailable_registry, include_inherited=True)

        def fail(interface):
            raise AssertionError("interface must not be introspected")

        monkeypatch.setattr(detector, "signatures", fail)

        assert detector.is_reactive(StreamingUserRepository) is False
        assert detector.repository_type(StreamingUserRepository) is RepositoryType.IMPERATIVE

    def test_disabled_library_is_not_recognized(self):
        futures_only = ReactiveWrappers(libraries=[], extra_types=["concurrent.futures.Future"])

        assert is_reactive_repository(CallbackUserRepository, futures_only) is True
        assert is_reactive_repository(StreamingUserRepository, futures_only) is False

    @pytest.mark.parametrize("interface", [None, "UserRepository", UserRepository.find_by_id])
    def test_non_class_interface_raises(self, interface, registry):
        with pytest.raises(InvalidInterfaceError):
            is_reactive_repository(interface, registry)

    def test_non_class_interface_raises_even_when_unavailable(self, unavailable_registry):
        with pytest.raises(InvalidInterfaceError):
            is_reactive_repository(None, unavailable_registry)


class TestReactiveDetector:
    def test_reactive_methods(self, registry):
        detector = ReactiveDetector(registry, include_inherited=True)

        methods = detector.reactive_methods(StreamingUserRepository)

        assert [m.name for m in methods] == ["find_all"]

    def test_include_inherited_defaults_to_settings(self, registry, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CODEGRAPH_REACTIVE_INCLUDE_INHERITED", "false")

        detector = ReactiveDetector(registry)

        assert detector.include_inherited is False
        assert detector.repository_type(DerivedRepository) is RepositoryType.IMPERATIVE

    def test_shared_instance_is_stable(self, registry):
        detector = ReactiveDetector(registry, include_inherited=True)

        results = [detector.is_reactive(CallbackUserRepository) for _ in range(3)]

        assert results == [True, True, True]
