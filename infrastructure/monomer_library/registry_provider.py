from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import structlog

from domain.aggregates.monomer_registry import MonomerRegistry

if TYPE_CHECKING:
    from application.ports.monomer_library import MonomerLibrary

logger = structlog.get_logger()


class MonomerRegistryProvider:
    """Load the monomer registry once and hand the same instance to every caller.

    The first call to ``get`` reads the library under a lock; threads that
    arrive meanwhile wait and then receive the registry that call built. A
    failed load leaves nothing cached, so the next call tries again.
    """

    def __init__(self, library: MonomerLibrary) -> None:
        self._library = library
        self._registry: MonomerRegistry | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._registry is not None

    def get(self) -> MonomerRegistry:
        registry = self._registry
        if registry is not None:
            return registry

        with self._lock:
            if self._registry is None:
                logger.info("monomer_registry_loading", library=type(self._library).__name__)
                self._registry = MonomerRegistry(self._library.load())
                logger.info("monomer_registry_loaded", monomers=len(self._registry))
            return self._registry

    def initialize(self) -> MonomerRegistry:
        """Load eagerly; calling it again returns the registry already built."""
        return self.get()
