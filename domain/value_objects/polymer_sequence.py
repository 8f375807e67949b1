from pydantic import BaseModel, ConfigDict

from domain.value_objects.polymer_type import PolymerType


class PolymerSequence(BaseModel):
    """Natural-analogue sequence of one polymer."""

    model_config = ConfigDict(frozen=True)

    polymer_id: str
    polymer_type: PolymerType
    sequence: str
