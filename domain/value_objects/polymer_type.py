from enum import Enum


class PolymerType(str, Enum):
    """Represent the polymer classes a HELM polymer id can carry."""

    PEPTIDE = "PEPTIDE"
    RNA = "RNA"
    CHEM = "CHEM"
    BLOB = "BLOB"

    @property
    def sort_order(self) -> int:
        """Position of this type in canonical polymer ordering."""
        return list(PolymerType).index(self)


class HelmVersion(str, Enum):
    """Grammar version a notation was written in."""

    V1 = "V1.0"
    V2 = "V2.0"
