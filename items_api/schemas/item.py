from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemBase(BaseModel):
    name: str
    description: str | None = None


class ItemCreate(ItemBase):
    name: str = Field(..., min_length=1)

    @field_validator("description")
    @classmethod
    def empty_description_is_null(cls, value: str | None) -> str | None:
        return value or None


class ItemUpdate(ItemBase):
    """Full replacement: both columns are overwritten with the values as given.

    An omitted description becomes null. name must be present and non-null but may be empty.
    """


class Item(ItemBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class DeleteResult(BaseModel):
    success: bool = True
