"""Revenue lookup request, query and result models."""

import re
from datetime import date
from enum import Enum

from pydantic import Field, field_validator, model_validator

from admanager_relay.clients.admanager.validation import AdManagerInputValidator
from admanager_relay.models.base import RelayModel

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
REQUIRED_REVENUE_FIELDS = ("utmCampaign", "startDate", "endDate")


class RevenueSource(str, Enum):
    """Where a revenue figure came from."""

    REAL = "real"
    MOCK = "mock"


def parse_report_date(value: str, field_name: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string into a date."""
    value = value.strip()
    if not DATE_PATTERN.fullmatch(value):
        raise ValueError(f"{field_name} must be a date in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"{field_name} must be a date in YYYY-MM-DD format") from e


class RevenueRequest(RelayModel):
    """Raw body of a revenue lookup; every field may be absent."""

    utm_campaign: str | None = None
    website_url: str | None = None
    start_date: str | None = None
    end_date: str | None = None

    @field_validator("utm_campaign", "start_date", "end_date", "website_url", mode="before")
    @classmethod
    def drop_non_text(cls, v):
        # Numbers, booleans and objects count as absent
        return v if isinstance(v, str) else None

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or blank."""
        values = {
            "utmCampaign": self.utm_campaign,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }
        return [
            name
            for name in REQUIRED_REVENUE_FIELDS
            if values[name] is None or not values[name].strip()
        ]

    def to_query(self) -> "RevenueQuery":
        """Validate the request into a query.

        Raises:
            ValueError: If a required field is missing or a date is malformed
        """
        missing = self.missing_fields()
        if missing:
            raise ValueError(
                f"Required parameters: {', '.join(REQUIRED_REVENUE_FIELDS)}"
            )
        start_date = parse_report_date(self.start_date, "startDate")
        end_date = parse_report_date(self.end_date, "endDate")
        if end_date < start_date:
            raise ValueError("endDate must not be before startDate")

        return RevenueQuery(
            campaign_tag=AdManagerInputValidator.validate_campaign_tag(self.utm_campaign),
            website_url=self.website_url,
            start_date=start_date,
            end_date=end_date,
        )


class RevenueQuery(RelayModel):
    """Validated revenue lookup."""

    campaign_tag: str = Field(..., min_length=1, description="UTM campaign tag")
    website_url: str | None = Field(None, description="Site the campaign runs on")
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class ReportPeriod(RelayModel):
    """Date range echoed back to the caller."""

    start_date: date
    end_date: date


class RevenueResult(RelayModel):
    """Revenue figure returned by the aggregator.

    ``source`` tells callers whether the figure is real or a zero placeholder
    produced after a failure.
    """

    success: bool = True
    total_revenue: float = 0.0
    source: RevenueSource = RevenueSource.REAL
    utm_campaign: str | None = None
    website_url: str | None = None
    period: ReportPeriod | None = None
    records_found: int | None = None
    error: str | None = None
    requires_auth: bool | None = None

    @classmethod
    def real(
        cls, query: RevenueQuery, total_revenue: float, records_found: int
    ) -> "RevenueResult":
        return cls(
            total_revenue=total_revenue,
            source=RevenueSource.REAL,
            utm_campaign=query.campaign_tag,
            website_url=query.website_url,
            period=ReportPeriod(start_date=query.start_date, end_date=query.end_date),
            records_found=records_found,
        )

    @classmethod
    def mock(cls, error: str, requires_auth: bool) -> "RevenueResult":
        return cls(
            total_revenue=0.0,
            source=RevenueSource.MOCK,
            error=error,
            requires_auth=requires_auth,
        )
