"""Dependency Injection Container.

This module implements a simple DI container using dataclasses.
The container holds all dependencies and provides factory methods
for creating the full dependency graph.

Pattern: Service Locator + Factory
Benefits:
- Single place to wire all dependencies
- Easy to test (can inject fake transports and schedulers)
- Clear dependency graph
"""

from dataclasses import dataclass
from typing import Optional

from ..config_loader import ClientConfig
from ..domain.entities.event_log import EventLog
from ..domain.interfaces import IScheduler, ITransport
from ..infrastructure.protocol import ProtocolSimulator
from ..infrastructure.scheduling import AsyncioScheduler
from ..infrastructure.transport import ConnectionManager, WebSocketTransport


@dataclass
class DIContainer:
    """Dependency Injection Container.

    Attributes:
        config: Client configuration

        # Infrastructure Layer
        scheduler: Timer scheduler
        transport: WebSocket transport
        simulator: Protocol simulator for simulated mode

        # Domain
        event_log: Event log shared with the display

        # Connection lifecycle
        connection_manager: The connection manager

    Example:
        >>> container = create_container(load_client_config())
        >>> container.connection_manager.connect()
    """

    # Core
    config: ClientConfig

    # Infrastructure Layer (implementations of domain interfaces)
    scheduler: Optional[IScheduler] = None
    transport: Optional[ITransport] = None
    simulator: Optional[ProtocolSimulator] = None

    # Domain
    event_log: Optional[EventLog] = None

    # Connection lifecycle
    connection_manager: Optional[ConnectionManager] = None

    def shutdown(self) -> None:
        """Tear down the connection manager, if created."""
        if self.connection_manager is not None:
            self.connection_manager.shutdown()


def create_container(
    config: Optional[ClientConfig] = None,
    transport: Optional[ITransport] = None,
    scheduler: Optional[IScheduler] = None,
) -> DIContainer:
    """Factory function to create fully-wired DI container.

    Dependencies are created in order:
    1. Infrastructure layer (no dependencies)
    2. Domain entities
    3. Connection manager (depends on all of the above)

    Args:
        config: Client configuration (default: built-in defaults)
        transport: Transport override (default: WebSocketTransport)
        scheduler: Scheduler override (default: AsyncioScheduler)

    Returns:
        Fully-wired DIContainer with all dependencies
    """
    container = DIContainer(config=config or ClientConfig())

    # Infrastructure Layer
    container.scheduler = scheduler or _create_scheduler()
    container.transport = transport or _create_transport()
    container.simulator = _create_simulator(
        container.scheduler, container.config.simulated_latency_ms
    )

    # Domain
    container.event_log = EventLog()

    container.connection_manager = ConnectionManager(
        transport=container.transport,
        scheduler=container.scheduler,
        event_log=container.event_log,
        simulator=container.simulator,
        config=container.config,
    )

    return container


# Infrastructure Layer Factory Functions


def _create_scheduler() -> IScheduler:
    """Create scheduler.

    Returns:
        IScheduler implementation (AsyncioScheduler)
    """
    return AsyncioScheduler()


def _create_transport() -> ITransport:
    """Create WebSocket transport.

    Returns:
        ITransport implementation (WebSocketTransport)
    """
    return WebSocketTransport()


def _create_simulator(scheduler: IScheduler, latency_ms: int) -> ProtocolSimulator:
    """Create protocol simulator.

    Args:
        scheduler: Scheduler delivering simulated replies
        latency_ms: Artificial latency

    Returns:
        ProtocolSimulator
    """
    return ProtocolSimulator(scheduler, latency_ms=latency_ms)


def validate_container(container: DIContainer) -> bool:
    """Validate that container has all required dependencies.

    Args:
        container: Container to validate

    Returns:
        True if all critical dependencies are present

    Raises:
        ValueError: If critical dependencies are missing

    Example:
        >>> container = create_container()
        >>> assert validate_container(container)
    """
    critical_dependencies = [
        "config",
        "scheduler",
        "transport",
        "simulator",
        "event_log",
        "connection_manager",
    ]

    missing = []
    for dep_name in critical_dependencies:
        if getattr(container, dep_name, None) is None:
            missing.append(dep_name)

    if missing:
        raise ValueError(f"Missing critical dependencies: {', '.join(missing)}")

    return True
