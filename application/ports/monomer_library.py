"""Monomer library interface (port) for the application layer."""

from abc import ABC, abstractmethod

from domain.value_objects.monomer import Monomer


class MonomerLibrary(ABC):
    """Interface for a source of monomer definitions.

    Implementations raise MonomerLibraryError when the source cannot be read
    or holds malformed entries, so a broken library never yields a partial
    registry.
    """

    @abstractmethod
    def load(self) -> list[Monomer]:
        """Read every monomer definition from the source.

        Raises:
            MonomerLibraryError: If the source is missing or malformed.

        """
