"""Knapsack solvers for choosing foods under a weight limit."""

from maxcalorie.optimizer.exhaustive import MAX_EXHAUSTIVE_ITEMS, exhaustive_select
from maxcalorie.optimizer.greedy import greedy_select
from maxcalorie.optimizer.models import (
    CapacityExceededInputSize,
    CatalogIOError,
    CatalogLoadError,
    FoodCatalog,
    FoodItem,
    InvalidItemError,
    MalformedRecordError,
    MaxCalorieError,
    SearchCancelledError,
    Selection,
)

__all__ = [
    "FoodItem",
    "FoodCatalog",
    "Selection",
    "MaxCalorieError",
    "InvalidItemError",
    "CatalogLoadError",
    "CatalogIOError",
    "MalformedRecordError",
    "CapacityExceededInputSize",
    "SearchCancelledError",
    "MAX_EXHAUSTIVE_ITEMS",
    "greedy_select",
    "exhaustive_select",
]
