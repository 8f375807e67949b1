from .annotation_notation import AnnotationNotation
from .connection_notation import ConnectionEndpoint, ConnectionNotation
from .grouping_notation import GroupingNotation, GroupMember
from .molecule_assembly import AssemblyBond, AssemblyNode, MoleculeAssembly
from .molecule_properties import MoleculeProperties
from .monomer import Attachment, CapGroup, Monomer, MonomerType
from .monomer_notation import (
    GroupAlternative,
    GroupKind,
    MonomerElement,
    MonomerGroup,
    MonomerUnit,
)
from .polymer_id import PolymerId
from .polymer_notation import PolymerNotation
from .polymer_sequence import PolymerSequence
from .polymer_type import HelmVersion, PolymerType

__all__ = [
    "AnnotationNotation",
    "AssemblyBond",
    "AssemblyNode",
    "Attachment",
    "CapGroup",
    "ConnectionEndpoint",
    "ConnectionNotation",
    "GroupAlternative",
    "GroupKind",
    "GroupMember",
    "GroupingNotation",
    "HelmVersion",
    "MoleculeAssembly",
    "MoleculeProperties",
    "Monomer",
    "MonomerElement",
    "MonomerGroup",
    "MonomerType",
    "MonomerUnit",
    "PolymerId",
    "PolymerNotation",
    "PolymerSequence",
    "PolymerType",
]
