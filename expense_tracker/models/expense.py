"""
Core Data Model for Expense Tracker

An Expense is the only entity the tracker stores. The model is used both
when creating new records and when loading the backing file, so the field
constraints double as the corruption check for stored data.

DESIGN DECISION: Field declaration order is the on-disk field order.
Files written by the tool always list id, description, amount, date.
"""

from datetime import date as date_type
from typing import Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    TypeAdapter,
    field_serializer,
)


class Expense(BaseModel):
    """
    One recorded monetary transaction.

    id and date are assigned once by the ledger and never edited.
    description and amount may be changed by an update.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: PositiveInt = Field(
        ...,
        description="Unique, monotonically assigned identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount spent (single currency)"
    )
    date: date_type = Field(
        ...,
        description="Creation date (YYYY-MM-DD)"
    )

    @field_serializer('amount')
    def serialize_amount(self, v: float) -> Union[int, float]:
        """Write integral amounts as JSON integers (100, not 100.0)."""
        return int(v) if v.is_integer() else v


# Adapter for the whole persisted collection (a top-level JSON array)
ExpenseList = TypeAdapter(list[Expense])


def format_amount(value: float) -> str:
    """
    Render an amount the way it appears in the backing file.

    Integral values lose the trailing ".0"; everything else uses the
    shortest repr that round-trips.
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
