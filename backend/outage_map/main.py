import asyncio
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from outage_map.config import settings
from outage_map.services import pse_client
from outage_map.services.day_boundary import DayBoundaryPolicy
from outage_map.services.outage_poller import OutagePoller
from outage_map.services.snapshot_store import SnapshotStore

STATIC_DIR = Path(__file__).parent / "static"


def build_poller() -> OutagePoller:
    poller = OutagePoller(
        fetcher=pse_client.fetch_outages,
        store=SnapshotStore(settings.state_file),
        policy=DayBoundaryPolicy(settings.reset_timezone),
    )
    poller.load_state()
    return poller


@asynccontextmanager
async def lifespan(app: FastAPI):
    from outage_map.tasks.scheduler import start_scheduler, stop_scheduler
    poller = build_poller()
    app.state.poller = poller
    start_scheduler(poller)
    # Fetch on startup instead of waiting for the first interval
    app.state.initial_fetch = asyncio.create_task(poller.tick())
    yield
    stop_scheduler()
    initial_fetch = app.state.initial_fetch
    if not initial_fetch.done():
        initial_fetch.cancel()
        with suppress(asyncio.CancelledError):
            await initial_fetch
    await poller.close()


app = FastAPI(
    title="PSE Outage Map",
    description="PSE outages classified against a start-of-day baseline",
    version="0.1.0",
    lifespan=lifespan,
)

from outage_map.routers import map_page, outage  # noqa: E402

app.include_router(map_page.router)
app.include_router(outage.router, prefix="/api")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/health")
async def health(request: Request):
    poller: OutagePoller | None = getattr(request.app.state, "poller", None)
    baseline_date = poller.baseline_date if poller else None
    return {
        "status": "ok",
        "cached": bool(poller and poller.cached is not None),
        "baseline_date": baseline_date.isoformat() if baseline_date else None,
    }
