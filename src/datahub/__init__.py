from .meds import build_meds_table, count_attribute
from .screen_time import generate_screen_time

__all__ = [
    "build_meds_table",
    "count_attribute",
    "generate_screen_time",
]
