"""Index descriptor schema."""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class IndexDescriptor(BaseModel):
    """One remote index, as listed by ``GET /indexes``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    uid: str = Field(validation_alias=AliasChoices("uid", "indexUid"))
    name: str | None = None
    primary_key: str | None = Field(default=None, alias="primaryKey")
    created_at: str | None = Field(default=None, alias="createdAt")  # as reported, not parsed
    updated_at: str | None = Field(default=None, alias="updatedAt")
