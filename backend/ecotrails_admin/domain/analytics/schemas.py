from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DateRange(BaseModel):
    start: datetime | None = Field(default=None, validation_alias=AliasChoices("start", "Start"))
    end: datetime | None = Field(default=None, validation_alias=AliasChoices("end", "End"))


class AnalyticsSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="ignore")

    total_platform_revenue: float = 0
    total_commission_earned: float = 0
    total_partner_payouts: float = 0
    total_bookings: int = 0
    date_range: DateRange | None = None
