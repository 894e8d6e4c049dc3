"""
Mood Trend Aggregation
======================
Groups mood entries by UTC calendar day and averages the ratings of each
day for the trend chart.

Ratings are accumulated as an integer sum and count per day; rounding to
two decimals happens once, when the average is read. Days with no
entries are omitted rather than zero-filled, and the output is sorted
oldest first whatever order the entries arrive in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timezone
from typing import Iterable

from app.models.mood import DayAverage, MoodEntry


@dataclass
class DayBucket:
    day: date
    total: int = 0
    count: int = 0

    def add(self, rating: int) -> None:
        self.total += rating
        self.count += 1

    @property
    def average(self) -> float:
        return round(self.total / self.count, 2)


def day_of(entry: MoodEntry) -> date:
    """UTC calendar date an entry falls on."""
    return entry.recorded_at.astimezone(timezone.utc).date()


def bucket_by_day(entries: Iterable[MoodEntry]) -> list[DayAverage]:
    buckets: dict[date, DayBucket] = {}
    for entry in entries:
        day = day_of(entry)
        bucket = buckets.get(day)
        if bucket is None:
            bucket = buckets[day] = DayBucket(day)
        bucket.add(entry.rating)

    return [
        DayAverage(date=bucket.day, average_rating=bucket.average)
        for bucket in sorted(buckets.values(), key=lambda b: b.day)
    ]
