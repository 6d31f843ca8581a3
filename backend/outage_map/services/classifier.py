"""Outage classification against the start-of-day baseline.

Only id membership decides the category. An outage whose polygon changed
shape since the baseline is still "existing", reported with its current shape.
"""

from outage_map.schemas.outage import OutageClassification, OutagePolygon, OutageSet


def classify(current: OutageSet, baseline: OutageSet) -> OutageClassification:
    """Split current + baseline outages into added, ended and existing."""
    added: list[OutagePolygon] = []
    existing: list[OutagePolygon] = []
    ended: list[OutagePolygon] = []

    for point_id, coords in current.items():
        entry = OutagePolygon(id=point_id, coords=coords)
        if point_id in baseline:
            existing.append(entry)
        else:
            added.append(entry)

    for point_id, coords in baseline.items():
        if point_id not in current:
            ended.append(OutagePolygon(id=point_id, coords=coords))

    return OutageClassification(added=added, ended=ended, existing=existing)
