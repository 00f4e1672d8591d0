"""Report job payloads for the Ad Manager ReportService."""

from datetime import date
from typing import Any

from admanager_relay.clients.admanager.validation import AdManagerInputValidator

REPORT_DIMENSIONS = ("DATE", "AD_UNIT_NAME")
CAMPAIGN_TAG_BIND_VARIABLE = "campaignTag"


def to_admanager_date(value: date) -> dict[str, int]:
    """Convert a date into the Ad Manager ``Date`` shape."""
    return {"year": value.year, "month": value.month, "day": value.day}


def build_campaign_statement(campaign_tag: str) -> dict[str, Any]:
    """Build a PQL statement matching ad unit names that contain the tag.

    The tag travels as a bind variable so it cannot alter the statement.
    """
    campaign_tag = AdManagerInputValidator.validate_campaign_tag(campaign_tag)
    return {
        "query": f"WHERE AD_UNIT_NAME LIKE :{CAMPAIGN_TAG_BIND_VARIABLE}",
        "values": [
            {
                "key": CAMPAIGN_TAG_BIND_VARIABLE,
                "value": {"xsi_type": "TextValue", "value": f"%{campaign_tag}%"},
            }
        ],
    }


def build_revenue_report_job(
    campaign_tag: str,
    start_date: date,
    end_date: date,
    revenue_column: str = "AD_EXCHANGE_REVENUE",
) -> dict[str, Any]:
    """Build the report job that breaks revenue down by date and ad unit.

    Args:
        campaign_tag: Substring matched against ad unit names
        start_date: First day of the report
        end_date: Last day of the report
        revenue_column: Report column to aggregate

    Returns:
        ReportJob dictionary for ``ReportService.runReportJob``
    """
    return {
        "reportQuery": {
            "dimensions": list(REPORT_DIMENSIONS),
            "columns": [revenue_column],
            "dateRangeType": "CUSTOM_DATE",
            "startDate": to_admanager_date(start_date),
            "endDate": to_admanager_date(end_date),
            "statement": build_campaign_statement(campaign_tag),
        }
    }
