"""Static defaults for the bundled example tables."""

from __future__ import annotations

from typing import List, Tuple, TypedDict


class ScreenTimeConfig(TypedDict):
    n_days: int
    devices: Tuple[str, ...]
    seed: int
    minutes_range: Tuple[float, float]
    weight_range: Tuple[float, float]
    weight_column: str


class MedRecord(TypedDict):
    person_id: int
    med_name: str
    color: str
    shape: str


# ---------------------------------------------------------------------------
# Screen time: minutes per device per day, with an intensity weight.

SCREEN_TIME: ScreenTimeConfig = {
    "n_days": 10,
    "devices": ("Phone", "Laptop", "Tablet", "TV"),
    "seed": 123,
    "minutes_range": (10.0, 180.0),
    "weight_range": (0.5, 2.0),
    "weight_column": "grid_memory_error_distance",
}

# ---------------------------------------------------------------------------
# Medications: pill attributes per person.

MEDS: List[MedRecord] = [
    {"person_id": 1, "med_name": "A", "color": "Red", "shape": "Round"},
    {"person_id": 1, "med_name": "B", "color": "White", "shape": "Oval"},
    {"person_id": 1, "med_name": "C", "color": "Red", "shape": "Round"},
    {"person_id": 2, "med_name": "D", "color": "Blue", "shape": "Oval"},
    {"person_id": 2, "med_name": "E", "color": "Blue", "shape": "Round"},
    {"person_id": 3, "med_name": "F", "color": "Red", "shape": "Round"},
]


__all__ = [
    "MEDS",
    "MedRecord",
    "SCREEN_TIME",
    "ScreenTimeConfig",
]
