"""PSE Outage Map client.

Fetches the anonymous outage map list view from pse.com and turns it into an
OutageSet keyed by point-of-interest id. No authentication required.
"""

import logging

import httpx
from pydantic import ValidationError

from outage_map.config import settings
from outage_map.errors import FetchError
from outage_map.schemas.outage import LatLng, OutageSet

logger = logging.getLogger(__name__)


async def fetch_outages() -> OutageSet:
    """Fetch current PSE outage polygons. Raises FetchError on any failure."""
    try:
        async with httpx.AsyncClient(timeout=settings.fetch_timeout_seconds) as client:
            resp = await client.get(settings.pse_outage_map_url)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as e:
        raise FetchError(f"PSE outage map request failed: {e}") from e
    except ValueError as e:
        raise FetchError(f"PSE outage map returned invalid JSON: {e}") from e

    outages = _parse_map(data)
    logger.info("PSE: fetched %d outage polygons", len(outages))
    return outages


def _parse_map(data) -> OutageSet:
    """Parse the PseMap list into {point id: polygon}."""
    entries = data.get("PseMap") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise FetchError("PSE outage map payload has no PseMap list")

    outages: OutageSet = {}
    skipped = 0
    for entry in entries:
        try:
            point_id = entry["DataProvider"]["PointOfInterest"]["Id"]
            coords = [
                LatLng(lat=float(p["Latitude"]), lng=float(p["Longitude"]))
                for p in entry.get("Polygon") or []
            ]
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            skipped += 1
            logger.warning("PSE: skipping malformed outage entry: %s", e)
            continue
        # ids are opaque str/int keys; anything else can't be stored or served
        if isinstance(point_id, bool) or not isinstance(point_id, (str, int)):
            skipped += 1
            logger.warning("PSE: skipping outage entry with invalid id %r", point_id)
            continue
        outages[point_id] = coords

    if skipped:
        logger.warning("PSE: skipped %d of %d outage entries", skipped, len(entries))
    return outages
