"""Exact subset-enumeration solver.

Every subset of an n-item catalog is identified by an integer mask in
[0, 2**n): bit j set means item j is in the subset. The solver walks the
masks in ascending order, evaluates each subset once, and keeps the first
feasible subset with the highest calorie total. Cost is O(2**n * n), so the
catalog must be pre-filtered to a small size before calling it.

The enumeration counter is treated as a 64-bit word. Catalogs that would
need more bits than that are rejected instead of being searched.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from maxcalorie.optimizer.models import (
    CapacityExceededInputSize,
    FoodCatalog,
    SearchCancelledError,
    Selection,
)

logger = logging.getLogger(__name__)

COUNTER_BITS = 64
MAX_EXHAUSTIVE_ITEMS = COUNTER_BITS - 2  # n >= 63 is rejected

# Masks between polls of should_stop / time_limit
CANCEL_CHECK_INTERVAL = 4096


def mask_to_indices(mask: int, size: int) -> list[int]:
    """Return the catalog positions whose bits are set in mask."""
    return [j for j in range(size) if (mask >> j) & 1]


def check_exhaustive_size(size: int, max_items: int = MAX_EXHAUSTIVE_ITEMS) -> None:
    """Validate that a catalog of the given size may be searched exhaustively.

    Args:
        size: Number of items in the catalog
        max_items: Largest accepted catalog size, at most MAX_EXHAUSTIVE_ITEMS

    Raises:
        ValueError: If max_items is outside [0, MAX_EXHAUSTIVE_ITEMS]
        CapacityExceededInputSize: If size exceeds max_items
    """
    if not 0 <= max_items <= MAX_EXHAUSTIVE_ITEMS:
        raise ValueError(
            f"max_items must be between 0 and {MAX_EXHAUSTIVE_ITEMS}, got {max_items}"
        )
    if size > max_items:
        raise CapacityExceededInputSize(size, max_items)


def exhaustive_select(
    catalog: FoodCatalog,
    capacity: float,
    *,
    max_items: int = MAX_EXHAUSTIVE_ITEMS,
    should_stop: Optional[Callable[[], bool]] = None,
    time_limit: Optional[float] = None,
) -> Selection:
    """Find the subset with the most calories that fits within capacity.

    Ties are broken in favor of the subset reached first in ascending mask
    order: a candidate replaces the best so far only when its calorie total
    is strictly greater. The best total starts at zero, so the empty
    selection is returned when no subset has positive calories.

    should_stop and time_limit are an optional cooperative cancellation hook.
    Neither changes the result of a search that runs to completion.

    Args:
        catalog: Foods to choose from, at most max_items long
        capacity: Maximum total weight in ounces
        max_items: Size bound to enforce (keyword-only)
        should_stop: Callable polled during the search; returning True aborts
        time_limit: Wall-clock budget in seconds

    Returns:
        Selection in catalog order

    Raises:
        CapacityExceededInputSize: If the catalog is larger than max_items
        SearchCancelledError: If should_stop or time_limit ended the search
    """
    n = len(catalog)
    check_exhaustive_size(n, max_items)

    if n == 0 or capacity <= 0:
        return Selection.empty()

    weights = [item.weight for item in catalog]
    calories = [item.calories for item in catalog]

    cancellable = should_stop is not None or time_limit is not None
    deadline = time.monotonic() + time_limit if time_limit is not None else None

    best_calories = 0.0
    best_mask: Optional[int] = None
    total_masks = 1 << n

    for mask in range(total_masks):
        if cancellable and mask % CANCEL_CHECK_INTERVAL == 0:
            stop_requested = should_stop is not None and should_stop()
            timed_out = deadline is not None and time.monotonic() >= deadline
            if stop_requested or timed_out:
                best = (
                    catalog.subset(mask_to_indices(best_mask, n))
                    if best_mask is not None
                    else Selection.empty()
                )
                reason = "time limit reached" if timed_out else "stop requested"
                logger.warning(
                    "Exhaustive search cancelled (%s) after %d of %d subsets",
                    reason,
                    mask,
                    total_masks,
                )
                raise SearchCancelledError(
                    f"Exhaustive search cancelled ({reason}) after "
                    f"{mask} of {total_masks} subsets",
                    examined=mask,
                    best=best,
                )

        subset_weight = 0.0
        subset_calories = 0.0
        for j in range(n):
            if (mask >> j) & 1:
                subset_weight += weights[j]
                subset_calories += calories[j]

        if subset_weight <= capacity and subset_calories > best_calories:
            best_calories = subset_calories
            best_mask = mask

    if best_mask is None:
        selection = Selection.empty()
    else:
        selection = catalog.subset(mask_to_indices(best_mask, n))

    logger.info(
        "Exhaustive search over %d subsets chose %d foods: %.2f oz, %.2f calories",
        total_masks,
        len(selection),
        selection.total_weight,
        selection.total_calories,
    )
    return selection
