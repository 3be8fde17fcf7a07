"""Public calendar models."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .enums import DayStatus


class CalendarDay(BaseModel):
    """A single night on the public calendar.

    Carries no guest information.
    """

    model_config = ConfigDict(strict=True)

    date: dt.date = Field(..., description="The night (YYYY-MM-DD)")
    status: DayStatus
