"""Base models for projectshelf."""

from pydantic import BaseModel, ConfigDict


class ShelfBaseModel(BaseModel):
    """Base model for records that are persisted to the shelf store.

    Unknown keys are kept so blobs written by other versions of the tool
    survive a load/persist cycle.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="allow",
    )


class ShelfStrictModel(BaseModel):
    """Base model for immutable display values."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
        frozen=True,
    )
