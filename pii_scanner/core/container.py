"""Dependency injection container."""

from typing import Dict, Any, Callable, Optional, TypeVar, Type

T = TypeVar("T")


class Container:
    """
    Name-based registry of scanner components.

    Three lifetimes are supported: ready-made singletons, lazily built
    singletons (factories) and transients rebuilt on every resolve.
    """

    def __init__(self):
        self._singletons: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._transient: Dict[str, Callable[[], Any]] = {}

    def register_singleton(self, name: str, instance: Any) -> None:
        """Register an already built instance under ``name``."""
        self._singletons[name] = instance

    def register_factory(self, name: str, factory: Callable[[], Any]) -> None:
        """
        Register a factory called once, on first resolve.

        Args:
            name: Component name
            factory: Zero-argument callable building the component
        """
        self._singletons.pop(name, None)
        self._factories[name] = factory

    def register_transient(self, name: str, factory: Callable[[], Any]) -> None:
        """Register a factory called on every resolve."""
        self._transient[name] = factory

    def register_type(
        self,
        name: str,
        cls: Type[T],
        *args,
        singleton: bool = True,
        **kwargs
    ) -> None:
        """
        Register a class together with its constructor arguments.

        Args:
            name: Component name
            cls: Class to instantiate
            *args: Positional constructor arguments
            singleton: Build once (default) or on every resolve
            **kwargs: Keyword constructor arguments
        """
        def factory():
            return cls(*args, **kwargs)

        if singleton:
            self.register_factory(name, factory)
        else:
            self.register_transient(name, factory)

    def resolve(self, name: str) -> Any:
        """
        Resolve a component by name.

        Raises:
            KeyError: If nothing is registered under ``name``
        """
        if name in self._singletons:
            return self._singletons[name]

        if name in self._factories:
            instance = self._factories[name]()
            self._singletons[name] = instance
            return instance

        if name in self._transient:
            return self._transient[name]()

        raise KeyError(f"Dependency '{name}' not registered")

    def resolve_type(self, cls: Type[T]) -> T:
        """Resolve a component registered under its class name."""
        return self.resolve(cls.__name__)

    def has(self, name: str) -> bool:
        return name in self._singletons or name in self._factories or name in self._transient

    def clear(self) -> None:
        self._singletons.clear()
        self._factories.clear()
        self._transient.clear()


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Return the process container, wiring the default components on first use."""
    global _container
    if _container is None:
        _container = Container()
        _setup_default_dependencies(_container)
    return _container


def _setup_default_dependencies(container: Container) -> None:
    """
    Register the default scanner components.

    Args:
        container: Container to configure
    """
    from pii_scanner.analyzers import DirectoryScanner, PermissionInspector
    from pii_scanner.core.scheduler import RecurrenceScheduler, ScheduledScanRunner
    from pii_scanner.core.sessions import ScanSessionManager, SessionStore
    from pii_scanner.detectors import BeninPIIPatterns
    from pii_scanner.models import get_settings
    from pii_scanner.processors import TextExtractor

    container.register_factory("Settings", get_settings)
    container.register_singleton("PatternRegistry", BeninPIIPatterns)
    container.register_type("TextExtractor", TextExtractor)
    container.register_type("PermissionInspector", PermissionInspector)
    container.register_type("SessionStore", SessionStore)
    container.register_type("RecurrenceScheduler", RecurrenceScheduler)

    def scanner_factory(settings):
        return DirectoryScanner(
            registry=container.resolve("PatternRegistry"),
            extractor=container.resolve("TextExtractor"),
            permission_inspector=container.resolve("PermissionInspector"),
            settings=settings,
        )

    container.register_singleton("ScannerFactory", scanner_factory)
    container.register_factory(
        "ScanSessionManager",
        lambda: ScanSessionManager(
            store=container.resolve("SessionStore"),
            scanner_factory=container.resolve("ScannerFactory"),
            settings=container.resolve("Settings"),
        ),
    )
    container.register_factory(
        "ScheduledScanRunner",
        lambda: ScheduledScanRunner(
            container.resolve("ScanSessionManager"),
            container.resolve("RecurrenceScheduler"),
        ),
    )


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    if _container:
        _container.clear()
    _container = None
