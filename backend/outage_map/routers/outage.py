from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from outage_map.errors import FetchError
from outage_map.schemas.outage import OutageClassification
from outage_map.services.outage_poller import OutagePoller

router = APIRouter(tags=["outages"])


def get_poller(request: Request) -> OutagePoller:
    return request.app.state.poller


def _fetch_failed() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "Failed to fetch data"})


@router.get("/outages", response_model=OutageClassification)
async def get_outages(poller: OutagePoller = Depends(get_poller)):
    """Outages added, ended and still existing since the start of the day."""
    try:
        return await poller.get_outages()
    except FetchError:
        return _fetch_failed()


@router.post("/admin/fetch", response_model=OutageClassification)
async def trigger_fetch(poller: OutagePoller = Depends(get_poller)):
    """Manually trigger a PSE fetch and reclassify."""
    try:
        return await poller.refresh()
    except FetchError:
        return _fetch_failed()
