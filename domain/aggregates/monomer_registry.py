from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from domain.exceptions import MonomerLibraryError
from domain.value_objects.monomer import Monomer
from domain.value_objects.polymer_type import PolymerType


class MonomerRegistry:
    """Read-only lookup from (polymer type, symbol) to a monomer definition.

    Built once from library data and never mutated afterwards, so a single
    instance can be shared by every thread in the process.
    """

    def __init__(self, monomers: Iterable[Monomer]) -> None:
        table: dict[tuple[PolymerType, str], Monomer] = {}
        for monomer in monomers:
            key = (monomer.polymer_type, monomer.symbol)
            if key in table:
                msg = f"Duplicate monomer {monomer.symbol!r} for polymer type {monomer.polymer_type.value}"
                raise MonomerLibraryError(msg)
            table[key] = monomer
        self._monomers = MappingProxyType(table)

    def resolve(self, polymer_type: PolymerType, symbol: str) -> Monomer | None:
        """Return the monomer for a symbol within one polymer type, or None."""
        return self._monomers.get((polymer_type, symbol))

    def polymer_types_of(self, symbol: str) -> set[PolymerType]:
        """All polymer types that define ``symbol``; used to report type mismatches."""
        return {ptype for (ptype, sym) in self._monomers if sym == symbol}

    def __len__(self) -> int:
        return len(self._monomers)

    def __contains__(self, key: object) -> bool:
        return key in self._monomers
