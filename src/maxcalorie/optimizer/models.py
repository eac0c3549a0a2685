"""Data models for food catalogs and selection results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence, Union


@dataclass(frozen=True)
class FoodItem:
    """One food item available for purchase.

    Calories are expected to be non-negative, but this is not enforced here;
    the pre-filter is where irrelevant items get dropped.
    """

    description: str
    weight: float  # ounces, must be positive
    calories: float

    def __post_init__(self) -> None:
        if not self.description:
            raise InvalidItemError("FoodItem.description must be non-empty")
        if not self.weight > 0:
            raise InvalidItemError(
                f"FoodItem[{self.description}] weight must be > 0, got {self.weight}"
            )

    @property
    def value(self) -> float:
        """Objective contribution of the item (its calories)."""
        return self.calories

    @property
    def ratio(self) -> float:
        """Calories per ounce."""
        return self.calories / self.weight


def _sum_foods(items: Iterable[FoodItem]) -> tuple[float, float]:
    total_weight = 0.0
    total_calories = 0.0
    for item in items:
        total_weight += item.weight
        total_calories += item.calories
    return total_weight, total_calories


@dataclass(frozen=True)
class Selection:
    """Subset of a catalog chosen by a solver.

    Attributes:
        items: Chosen items, the same objects held by the source catalog,
            in catalog order
        indices: Positions of the chosen items in the source catalog, ascending
        total_weight: Sum of item weights (ounces)
        total_calories: Sum of item calories
    """

    items: tuple[FoodItem, ...] = ()
    indices: tuple[int, ...] = ()
    total_weight: float = 0.0
    total_calories: float = 0.0

    @classmethod
    def empty(cls) -> "Selection":
        return cls()

    @property
    def total_value(self) -> float:
        return self.total_calories

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[FoodItem]:
        return iter(self.items)


@dataclass(frozen=True)
class FoodCatalog:
    """Ordered, immutable collection of food items.

    Order does not affect correctness, but it decides greedy tie order and
    the exhaustive enumeration order, and therefore which of several equally
    good answers is returned.
    """

    items: tuple[FoodItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists and generators, store a tuple
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[FoodItem]:
        return iter(self.items)

    def __getitem__(self, index: int) -> FoodItem:
        return self.items[index]

    @property
    def total_weight(self) -> float:
        return _sum_foods(self.items)[0]

    @property
    def total_calories(self) -> float:
        return _sum_foods(self.items)[1]

    @property
    def total_value(self) -> float:
        return self.total_calories

    def subset(self, indices: Sequence[int]) -> Selection:
        """Build a Selection from positions into this catalog.

        Args:
            indices: Catalog positions; duplicates are ignored and the
                result is always in catalog order

        Returns:
            Selection referencing this catalog's item objects
        """
        ordered = tuple(sorted(set(indices)))
        if not ordered:
            return Selection.empty()
        chosen = tuple(self.items[i] for i in ordered)
        total_weight, total_calories = _sum_foods(chosen)
        return Selection(
            items=chosen,
            indices=ordered,
            total_weight=total_weight,
            total_calories=total_calories,
        )


Foods = Union[FoodCatalog, Selection]


# Custom exceptions


class MaxCalorieError(Exception):
    """Base exception for maxcalorie errors."""

    pass


class InvalidItemError(MaxCalorieError, ValueError):
    """Raised when a food item violates its invariants."""

    pass


class CatalogLoadError(MaxCalorieError):
    """Raised when a food database cannot be turned into a catalog."""

    pass


class CatalogIOError(CatalogLoadError):
    """Raised when the food database cannot be read."""

    pass


class MalformedRecordError(CatalogLoadError):
    """Raised when a database row has the wrong number of fields.

    The whole load is aborted; partial catalogs are never returned.
    """

    def __init__(
        self,
        message: str,
        line_number: int,
        field_count: int,
        line: Optional[str] = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.field_count = field_count
        self.line = line


class CapacityExceededInputSize(MaxCalorieError):
    """Raised when a catalog is too large for exhaustive search.

    Pre-filter the catalog or fall back to the greedy solver.
    """

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Exhaustive search accepts at most {limit} items, got {size}; "
            f"filter the catalog first or use the greedy solver"
        )
        self.size = size
        self.limit = limit


class SearchCancelledError(MaxCalorieError):
    """Raised when an exhaustive search is stopped before completion."""

    def __init__(self, message: str, examined: int, best: Selection):
        super().__init__(message)
        self.examined = examined
        self.best = best
