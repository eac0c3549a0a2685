"""Narrow a catalog before exhaustive search."""

from __future__ import annotations

import logging

from maxcalorie.optimizer.models import FoodCatalog

logger = logging.getLogger(__name__)


def filter_catalog(
    catalog: FoodCatalog,
    min_calories: float,
    max_calories: float,
    max_count: int,
) -> FoodCatalog:
    """Keep the first max_count foods whose calories are in range.

    Drops foods that cannot help the objective (e.g. zero-calorie items
    when min_calories > 0) and caps the catalog size, since exhaustive
    search is exponential in it.

    Args:
        catalog: Source catalog
        min_calories: Inclusive lower bound on an item's calories
        max_calories: Inclusive upper bound on an item's calories
        max_count: Maximum number of items to keep

    Returns:
        New FoodCatalog holding the same item objects, in catalog order
    """
    kept = []
    if max_count > 0:
        for item in catalog:
            if min_calories <= item.calories <= max_calories:
                kept.append(item)
                if len(kept) >= max_count:
                    break

    logger.debug(
        "Filtered %d foods down to %d (calories %s..%s, max %d)",
        len(catalog),
        len(kept),
        min_calories,
        max_calories,
        max_count,
    )
    return FoodCatalog(kept)
