"""Descriptor for an asynchronous operation accepted by the instance."""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Update(BaseModel):
    # extra="allow": whatever else the instance sends stays available in model_extra
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    update_id: int | None = Field(
        default=None, validation_alias=AliasChoices("updateId", "taskUid")
    )
