"""FastAPI dependencies backed by the lagom container."""

from functools import lru_cache

from lagom import Container

from infrastructure.di.container import create_container
from infrastructure.monomer_library.registry_provider import MonomerRegistryProvider


@lru_cache
def get_container() -> Container:
    """Build the container once per process; every request shares it."""
    return create_container()


def get_registry_provider() -> MonomerRegistryProvider:
    return get_container()[MonomerRegistryProvider]
