from __future__ import annotations

from datetime import date as Date

from pydantic import BaseModel, ConfigDict, Field


class DayRecord(BaseModel):
    """
    One contribution-calendar day, as returned by GitHub:
    {"date": "2023-01-01", "contributionCount": 4}
    """

    model_config = ConfigDict(frozen=True)

    date: Date
    contributionCount: int = Field(ge=0)
