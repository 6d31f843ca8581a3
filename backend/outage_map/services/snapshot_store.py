"""Baseline snapshot persistence in a single JSON state file.

Each save overwrites the whole file in place. A crash mid-write can lose the
previous snapshot; the next startup then behaves as a first run.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from pydantic import ValidationError

from outage_map.errors import PersistError
from outage_map.schemas.outage import Baseline, BaselineFile

logger = logging.getLogger(__name__)


def format_reset_date(d: date) -> str:
    """en-US locale date string, e.g. 3/7/2026."""
    return f"{d.month}/{d.day}/{d.year}"


def parse_reset_date(val: str) -> date:
    return datetime.strptime(val.strip(), "%m/%d/%Y").date()


class SnapshotStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Baseline | None:
        """Read the persisted baseline, or None when absent or unreadable."""
        if not self.path.exists():
            logger.info("No baseline snapshot at %s", self.path)
            return None
        try:
            record = BaselineFile.model_validate_json(self.path.read_text(encoding="utf-8"))
            reset_date = parse_reset_date(record.last_reset_date)
        except (OSError, ValidationError, ValueError) as e:
            logger.warning("Ignoring unreadable baseline snapshot %s: %s", self.path, e)
            return None

        outages = {point_id: coords for point_id, coords in record.initial_outages}
        logger.info("Loaded baseline from %s: %d outages as of %s",
                    self.path, len(outages), record.last_reset_date)
        return Baseline(outages=outages, reset_date=reset_date)

    def save(self, baseline: Baseline) -> None:
        try:
            record = BaselineFile(
                initial_outages=list(baseline.outages.items()),
                last_reset_date=format_reset_date(baseline.reset_date),
            )
        except ValidationError as e:
            raise PersistError(f"Baseline cannot be serialized: {e}") from e
        try:
            self.path.write_text(record.model_dump_json(by_alias=True), encoding="utf-8")
        except OSError as e:
            raise PersistError(f"Failed to write baseline to {self.path}: {e}") from e
