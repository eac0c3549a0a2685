"""Greedy calorie-density heuristic."""

from __future__ import annotations

import dataclasses
import logging

import numpy as np

from maxcalorie.optimizer.models import FoodCatalog, Selection

logger = logging.getLogger(__name__)


def rank_by_ratio(catalog: FoodCatalog) -> np.ndarray:
    """Return catalog positions ordered by descending calories per ounce.

    The sort is stable, so items with equal ratios keep their catalog order.

    Args:
        catalog: Catalog to rank

    Returns:
        Integer array of catalog positions, best ratio first
    """
    if len(catalog) == 0:
        return np.array([], dtype=np.intp)

    calories = np.array([item.calories for item in catalog], dtype=float)
    weights = np.array([item.weight for item in catalog], dtype=float)
    ratios = calories / weights

    return np.argsort(-ratios, kind="stable")


def greedy_select(catalog: FoodCatalog, capacity: float) -> Selection:
    """Choose foods by calorie density until nothing else fits.

    Walks the ranking from rank_by_ratio once. An item is taken iff it fits
    in the weight that is still free; a rejected item is never revisited,
    even if capacity later turns out to suffice for it. The result is always
    feasible but only optimal for the fractional relaxation of the problem.

    Args:
        catalog: Foods to choose from
        capacity: Maximum total weight in ounces

    Returns:
        Selection in catalog order; empty when the catalog is empty or
        capacity <= 0
    """
    if len(catalog) == 0 or capacity <= 0:
        return Selection.empty()

    accumulated_weight = 0.0
    chosen: list[int] = []

    for position in rank_by_ratio(catalog):
        index = int(position)
        weight = catalog[index].weight
        if accumulated_weight + weight <= capacity:
            accumulated_weight += weight
            chosen.append(index)

    # Report the weight that was checked against capacity; a catalog-order
    # re-sum can differ in the last bit.
    selection = dataclasses.replace(
        catalog.subset(chosen), total_weight=accumulated_weight
    )
    logger.info(
        "Greedy chose %d of %d foods: %.2f oz, %.2f calories (capacity %.2f)",
        len(selection),
        len(catalog),
        selection.total_weight,
        selection.total_calories,
        capacity,
    )
    return selection
