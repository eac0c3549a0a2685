"""Food database loading and catalog filtering."""

from __future__ import annotations

from maxcalorie.data.loader import FoodDatabaseLoader, load_food_database
from maxcalorie.data.prefilter import filter_catalog

__all__ = [
    "FoodDatabaseLoader",
    "load_food_database",
    "filter_catalog",
]
