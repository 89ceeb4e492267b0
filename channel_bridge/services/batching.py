"""
Grouping of translated ARI records into destination batches.

The channel manager takes one request per room (availability) or per
(room, rate plan) pair (rates). Groups come out sorted by key and each
group's records sorted by date, so the same input always yields the same
payloads.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..schemas.channel import ChannelAvailability, ChannelRate

logger = logging.getLogger(__name__)


@dataclass
class AvailabilityBatch:
    """All availability days for a single channel room"""
    room_id: str
    values: List[ChannelAvailability]


@dataclass
class RateBatch:
    """All rate days for a single channel room and rate plan"""
    room_id: str
    rate_plan_id: str
    values: List[ChannelRate]


def group_availability(records: List[ChannelAvailability]) -> List[AvailabilityBatch]:
    groups: Dict[str, Dict] = {}
    for record in records:
        by_date = groups.setdefault(record.room_id, {})
        if record.date in by_date:
            logger.warning(f"Duplicate availability for room {record.room_id} on {record.date}; keeping last")
        by_date[record.date] = record

    return [
        AvailabilityBatch(room_id=room_id, values=[by_date[d] for d in sorted(by_date)])
        for room_id, by_date in sorted(groups.items())
    ]


def group_rates(records: List[ChannelRate]) -> List[RateBatch]:
    groups: Dict[Tuple[str, str], Dict] = {}
    for record in records:
        key = (record.room_id, record.rate_plan_id)
        by_date = groups.setdefault(key, {})
        if record.date in by_date:
            logger.warning(f"Duplicate rate for {key} on {record.date}; keeping last")
        by_date[record.date] = record

    return [
        RateBatch(room_id=room_id, rate_plan_id=rate_plan_id, values=[by_date[d] for d in sorted(by_date)])
        for (room_id, rate_plan_id), by_date in sorted(groups.items())
    ]
