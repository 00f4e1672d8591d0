"""HTTP endpoints of the relay."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from admanager_relay.api.dependencies import (
    get_connectivity_prober,
    get_revenue_aggregator,
)
from admanager_relay.clients.admanager.auth import MISSING_CREDENTIALS_MESSAGE
from admanager_relay.core.exceptions import AdManagerRelayError, sanitize_error_message
from admanager_relay.models.base import utc_now
from admanager_relay.models.network import ConnectionTestFailure, ConnectionTestResult
from admanager_relay.models.revenue import REQUIRED_REVENUE_FIELDS, RevenueRequest
from admanager_relay.services.connectivity import ConnectivityProber
from admanager_relay.services.revenue import RevenueAggregator

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": error})


async def _read_json_object(request: Request) -> dict[str, Any] | None:
    try:
        payload = await request.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {
        "status": "ok",
        "timestamp": utc_now().isoformat(),
        "message": "AdManager revenue relay is running",
    }


@router.post("/test-connection")
async def test_connection(
    prober: ConnectivityProber = Depends(get_connectivity_prober),
):
    """Authenticate the service account and report network metadata."""
    try:
        network_info = await prober.probe()
    except AdManagerRelayError as e:
        logger.error(f"Service account test failed ({e.kind.value}): {e}")
        failure = ConnectionTestFailure(
            error=MISSING_CREDENTIALS_MESSAGE
            if e.requires_setup
            else sanitize_error_message(str(e)),
            requires_setup=e.requires_setup,
        )
        return JSONResponse(
            status_code=400 if e.requires_setup else 500,
            content=failure.to_payload(),
        )
    except Exception as e:
        logger.exception("Service account test failed")
        failure = ConnectionTestFailure(
            error=sanitize_error_message(str(e)), requires_setup=False
        )
        return JSONResponse(status_code=500, content=failure.to_payload())

    return ConnectionTestResult(network_info=network_info).to_payload(exclude_none=False)


@router.post("/admanager-revenue")
async def admanager_revenue(
    request: Request,
    aggregator: RevenueAggregator = Depends(get_revenue_aggregator),
):
    """Total revenue for ad units whose name contains the UTM campaign tag.

    Malformed requests get a 400; every other failure comes back as a 200
    with ``source: "mock"`` and a zero total.
    """
    payload = await _read_json_object(request)
    if payload is None:
        return _bad_request(
            f"Request body must be a JSON object with: {', '.join(REQUIRED_REVENUE_FIELDS)}"
        )

    revenue_request = RevenueRequest.model_validate(payload)
    try:
        query = revenue_request.to_query()
    except ValueError as e:
        return _bad_request(str(e))

    result = await aggregator.fetch_revenue(query)
    return result.to_payload()
