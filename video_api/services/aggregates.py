"""Rating rules and aggregates over a video's embedded `ratings` array.

Everything here is pure: functions take the in-memory list loaded from the
video document, mutate it where noted, and return derived values. The
services persist the result through `VideosRepo.mutate_engagement`.

A rating entry looks like::

    {'user_id': str, 'rating': int, 'created_at': dt, 'updated_at': dt}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from video_api.core.errors import InvalidArgument

RATING_MIN = 1
RATING_MAX = 5
RATING_LEVELS = range(RATING_MIN, RATING_MAX + 1)

Rating = Dict[str, Any]


def validate_rating(value: Any) -> int:
    """Accept only true integers in [1, 5]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument('Rating must be an integer between 1 and 5')
    if not RATING_MIN <= value <= RATING_MAX:
        raise InvalidArgument('Rating must be an integer between 1 and 5')
    return value


def average_rating(ratings: List[Rating]) -> float:
    """Arithmetic mean of all rating values, 0.0 for an empty set."""
    if not ratings:
        return 0.0
    return sum(int(r['rating']) for r in ratings) / len(ratings)


def find_rating(ratings: List[Rating], user_id: str) -> Optional[Rating]:
    for entry in ratings:
        if entry['user_id'] == user_id:
            return entry
    return None


def upsert_rating(
    ratings: List[Rating],
    user_id: str,
    value: int,
    now: datetime,
) -> bool:
    """Overwrite the user's entry in place or append one.

    Returns True when a new entry was created.
    """
    value = validate_rating(value)
    entry = find_rating(ratings, user_id)
    if entry is not None:
        entry['rating'] = value
        entry['updated_at'] = now
        return False
    ratings.append({
        'user_id': user_id,
        'rating': value,
        'created_at': now,
        'updated_at': now,
    })
    return True


def remove_rating(ratings: List[Rating], user_id: str) -> Optional[Rating]:
    """Remove and return the user's entry, or None if they never rated."""
    entry = find_rating(ratings, user_id)
    if entry is not None:
        ratings.remove(entry)
    return entry


def rating_distribution(
    ratings: List[Rating],
) -> Tuple[Dict[str, int], Dict[str, str]]:
    """Count per level and each level's share as a one-decimal percent."""
    counts = {str(level): 0 for level in RATING_LEVELS}
    for entry in ratings:
        key = str(int(entry['rating']))
        if key in counts:
            counts[key] += 1

    total = len(ratings)
    percentages = {
        level: f'{count / total * 100:.1f}' if total else '0.0'
        for level, count in counts.items()
    }
    return counts, percentages
