from string import Template
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from outage_map.config import settings

router = APIRouter(tags=["map"])

_PAGE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>PSE Outage Map</title>
    <script src="https://maps.googleapis.com/maps/api/js?key=$api_key"></script>
    <style>
        body, html {
            margin: 0;
            padding: 0;
            height: 100%;
        }
        #map {
            width: 100%;
            height: 100%;
        }
    </style>
</head>
<body>
    <div id="map"></div>
    <script>window.OUTAGE_POLL_INTERVAL_MS = $poll_ms;</script>
    <script src="/static/script.js"></script>
</body>
</html>
""")


def render_map_page() -> str:
    return _PAGE.substitute(
        api_key=quote(settings.google_maps_api_key, safe=""),
        poll_ms=settings.client_poll_interval_seconds * 1000,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def map_page():
    """Map shell with the Google Maps API key injected."""
    return render_map_page()
