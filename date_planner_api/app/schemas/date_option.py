"""
Pydantic schemas for date options.

A date option is a labeled, weighted, colored choice.  Five options are
seeded when the store is created and flagged ``isDefault``; everything
created through the API is a custom option.  Types are strict: ``"2"``
is not a weight and ``5`` is not a label.  A whole number sent as
``2.0`` is accepted as weight 2.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr, field_validator

DEFAULT_WEIGHT = 1
DEFAULT_COLOR = "#DEB887"


def _whole_float_to_int(v):
    # JSON clients may send 2.0 for 2.
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


Weight = Annotated[StrictInt, BeforeValidator(_whole_float_to_int)]


class DateOptionCreate(BaseModel):
    """Schema for creating a date option.

    All three fields are mandatory here even though the record model
    has defaults for ``weight`` and ``color``.
    """

    label: StrictStr = Field(..., examples=["Picnic"])
    weight: Weight = Field(..., examples=[2])
    color: StrictStr = Field(..., examples=["#ABCDEF"])


class DateOptionUpdate(BaseModel):
    """Schema for partially updating a date option.

    All fields are optional; only provided values will be updated.
    Sending ``null`` for a field is rejected rather than treated as
    "leave unchanged".
    """

    label: Optional[StrictStr] = None
    weight: Optional[Weight] = None
    color: Optional[StrictStr] = None

    @field_validator("label", "weight", "color", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field may be omitted but must not be null")
        return v


class DateOption(BaseModel):
    """A stored date option as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    label: str
    weight: int = DEFAULT_WEIGHT
    color: str = DEFAULT_COLOR
    is_default: bool = Field(False, alias="isDefault")
