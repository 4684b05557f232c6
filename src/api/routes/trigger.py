"""Manual trigger for the daily status check."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.dependencies import get_settings, require_loopback_host
from core.config import Settings
from services.status_check import run_status_check

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route(
    "/",
    methods=["GET", "POST"],
    response_class=PlainTextResponse,
    dependencies=[Depends(require_loopback_host)],
)
async def trigger_status_check(settings: Settings = Depends(get_settings)):
    """
    Run the status check now.

    Returns 200 when the check completes, 500 if it fails.
    """
    try:
        result = await run_status_check(settings)
    except Exception:
        logger.exception("Error in status check")
        return PlainTextResponse("Error occurred", status_code=500)

    logger.info("Manual status check finished: %s", result)
    return PlainTextResponse("Status check completed", status_code=200)
