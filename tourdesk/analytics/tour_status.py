from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from tourdesk.models.tours import TourRecord
from tourdesk.models.types import TOUR_STATUSES
from tourdesk.shared.time import to_stored_wall_clock


def resolve_tour_status(local_now: datetime, start_date: datetime, end_date: datetime) -> str:
    """Lifecycle phase of a tour at ``local_now``.

    ``local_now`` is naive civil wall-clock time. Both boundaries are inclusive
    on the later phase, so a tour whose start equals its end goes straight from
    UPCOMING to COMPLETED.
    """
    start = to_stored_wall_clock(start_date)
    end = to_stored_wall_clock(end_date)
    if local_now >= end:
        return "COMPLETED"
    if local_now >= start:
        return "ONGOING"
    return "UPCOMING"


def plan_status_changes(
    tours: Iterable[TourRecord], local_now: datetime
) -> List[Tuple[TourRecord, str]]:
    """Tours whose stored status is stale, paired with the status to write."""
    changes: List[Tuple[TourRecord, str]] = []
    for tour in tours:
        status = resolve_tour_status(local_now, tour.start_date, tour.end_date)
        if status != tour.status:
            changes.append((tour, status))
    return changes


def count_by_status(tours: Iterable[TourRecord]) -> Dict[str, int]:
    counts = Counter(tour.status for tour in tours)
    return {status: counts.get(status, 0) for status in TOUR_STATUSES}
