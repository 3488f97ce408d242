"""
Helpers for wall-clock "HH:MM" time slots.

Slots are half-open intervals: a training ending at 18:00 and one starting
at 18:00 do not overlap.
"""
from typing import Optional


def parse_time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def times_overlap(start1: Optional[str], end1: Optional[str], start2: Optional[str], end2: Optional[str]) -> bool:
    # A slot with a missing bound never overlaps anything
    if not (start1 and end1 and start2 and end2):
        return False

    start1_minutes = parse_time_to_minutes(start1)
    end1_minutes = parse_time_to_minutes(end1)
    start2_minutes = parse_time_to_minutes(start2)
    end2_minutes = parse_time_to_minutes(end2)

    return start1_minutes < end2_minutes and end1_minutes > start2_minutes


def duration_hours(start_time: str, end_time: str) -> float:
    return (parse_time_to_minutes(end_time) - parse_time_to_minutes(start_time)) / 60


def format_slot(start_time: Optional[str], end_time: Optional[str]) -> str:
    return f"{start_time} - {end_time}"
