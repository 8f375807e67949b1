from pydantic import BaseModel, ConfigDict


class AnnotationNotation(BaseModel):
    """Free-text metadata attached to the whole structure."""

    model_config = ConfigDict(frozen=True)

    text: str

    def __str__(self) -> str:
        return self.text
