"""Main dependency injection container configuration.

Feed providers are singletons so one ``httpx.AsyncClient`` is reused per feed;
tests and library integrators override them with stubs:

    container = Container()
    container.caucion_provider.override(providers.Object(StubCaucionProvider()))
"""

from __future__ import annotations

from dependency_injector import containers, providers

from horizon.infrastructure.config import get_settings
from horizon.infrastructure.containers.data_providers import configure_data_providers


class Container(containers.DeclarativeContainer):
    """Dependency injection container for Horizon."""

    settings = providers.Singleton(get_settings)

    _data_providers_config = configure_data_providers()
    caucion_provider = _data_providers_config["caucion_provider"]
    exchange_rate_provider = _data_providers_config["exchange_rate_provider"]
    bond_provider = _data_providers_config["bond_provider"]


# Global container instance (can be overridden for testing)
_container: Container | None = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Set a custom container (useful for testing)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    _container = None
