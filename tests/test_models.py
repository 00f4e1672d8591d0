"""Tests for request, result and network models."""

from datetime import date
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from admanager_relay.models.network import (
    ConnectionTestFailure,
    ConnectionTestResult,
    NetworkInfo,
)
from admanager_relay.models.revenue import RevenueQuery, RevenueRequest, RevenueResult


class TestRevenueRequest:
    def test_to_query(self):
        request = RevenueRequest.model_validate(
            {
                "utmCampaign": " summer_sale ",
                "websiteUrl": "https://example.com",
                "startDate": "2024-06-01",
                "endDate": "2024-06-30",
            }
        )

        query = request.to_query()

        assert query.campaign_tag == "summer_sale"
        assert query.website_url == "https://example.com"
        assert query.start_date == date(2024, 6, 1)
        assert query.end_date == date(2024, 6, 30)

    def test_website_is_optional(self):
        request = RevenueRequest.model_validate(
            {"utmCampaign": "x", "startDate": "2024-01-01", "endDate": "2024-01-01"}
        )
        assert request.to_query().website_url is None

    @pytest.mark.parametrize(
        "payload, missing",
        [
            ({}, ["utmCampaign", "startDate", "endDate"]),
            ({"utmCampaign": "x", "startDate": "2024-01-01"}, ["endDate"]),
            ({"utmCampaign": "  ", "startDate": "2024-01-01", "endDate": "2024-01-02"}, ["utmCampaign"]),
        ],
    )
    def test_missing_fields(self, payload, missing):
        request = RevenueRequest.model_validate(payload)

        assert request.missing_fields() == missing
        with pytest.raises(ValueError, match="Required parameters: utmCampaign, startDate, endDate"):
            request.to_query()

    @pytest.mark.parametrize(
        "bad_date",
        ["2024/06/01", "06-01-2024", "2024-13-01", "yesterday", "2024-6-1", "2024-06-1", "20240601"],
    )
    def test_malformed_dates(self, bad_date):
        request = RevenueRequest(utm_campaign="x", start_date=bad_date, end_date="2024-06-30")

        with pytest.raises(ValueError, match="startDate must be a date in YYYY-MM-DD format"):
            request.to_query()

    def test_inverted_range(self):
        request = RevenueRequest(utm_campaign="x", start_date="2024-06-30", end_date="2024-06-01")

        with pytest.raises(ValueError, match="endDate must not be before startDate"):
            request.to_query()

    @pytest.mark.parametrize("tag", [False, 0, 2024, True, ["summer"], {"tag": "x"}])
    def test_non_string_campaign_counts_as_missing(self, tag):
        request = RevenueRequest.model_validate(
            {"utmCampaign": tag, "startDate": "2024-01-01", "endDate": "2024-01-31"}
        )

        assert request.missing_fields() == ["utmCampaign"]
        with pytest.raises(ValueError, match="Required parameters"):
            request.to_query()

    def test_non_string_website_is_dropped(self):
        request = RevenueRequest.model_validate(
            {"utmCampaign": "x", "websiteUrl": 1, "startDate": "2024-01-01", "endDate": "2024-01-31"}
        )
        assert request.to_query().website_url is None


class TestRevenueQuery:
    def test_rejects_inverted_range(self):
        with pytest.raises(ValidationError):
            RevenueQuery(
                campaign_tag="x",
                start_date=date(2024, 2, 1),
                end_date=date(2024, 1, 1),
            )


class TestRevenueResult:
    def test_mock_payload_has_no_query_echo(self):
        payload = RevenueResult.mock(error="boom", requires_auth=False).to_payload()

        assert payload == {
            "success": True,
            "totalRevenue": 0.0,
            "source": "mock",
            "error": "boom",
            "requiresAuth": False,
        }


class TestNetworkInfo:
    NETWORK = {
        "networkCode": 12345678,
        "displayName": "Publisher",
        "timeZone": "Europe/Lisbon",
        "currencyCode": "EUR",
        "propertyCode": "ca-pub-1",
        "effectiveRootAdUnitId": 99,
    }

    def test_from_dict(self):
        info = NetworkInfo.from_network(self.NETWORK)

        assert info.network_code == "12345678"
        assert info.publisher_id == "ca-pub-1"
        assert info.effective_root_ad_unit_id == "99"

    def test_from_object(self):
        info = NetworkInfo.from_network(SimpleNamespace(**self.NETWORK))

        assert info.display_name == "Publisher"
        assert info.time_zone == "Europe/Lisbon"

    def test_missing_attributes_are_none(self):
        info = NetworkInfo.from_network({"networkCode": "1"})

        assert info.currency_code is None
        assert info.publisher_id is None

    def test_connection_result_payload(self):
        info = NetworkInfo.from_network({"networkCode": "1", "displayName": "N"})

        payload = ConnectionTestResult(network_info=info).to_payload(exclude_none=False)

        assert payload["success"] is True
        assert payload["message"] == "Service account connected successfully"
        assert payload["networkInfo"]["networkCode"] == "1"
        assert payload["networkInfo"]["publisherId"] is None

    def test_connection_failure_payload(self):
        payload = ConnectionTestFailure(error="denied", requires_setup=True).to_payload()

        assert payload == {"success": False, "error": "denied", "requiresSetup": True}
