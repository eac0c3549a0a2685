"""Pytest fixtures for maxcalorie tests."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from maxcalorie.optimizer.models import FoodCatalog, FoodItem

SAMPLE_DATABASE = """\
description^weight_ounces^calories
Chicken breast^6^280
Brown rice^8^220
Olive oil^1^120
Broccoli^4^30
Peanut butter^2^190
Apple^7^95
"""


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.maxcalorie/config.yaml."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def classic_catalog() -> FoodCatalog:
    """Catalog where greedy is provably suboptimal at capacity 10."""
    return FoodCatalog(
        [
            FoodItem("A", 1, 10),
            FoodItem("B", 10, 100),
            FoodItem("C", 9, 95),
        ]
    )


@pytest.fixture
def sample_db_path(tmp_path) -> Path:
    """Write a small caret-delimited food database."""
    path = tmp_path / "foods.txt"
    path.write_text(SAMPLE_DATABASE)
    return path


def make_random_catalog(rng: random.Random, size: int) -> FoodCatalog:
    """Catalog with half-ounce weights so sums are exact in floating point."""
    return FoodCatalog(
        FoodItem(
            f"food-{i}",
            weight=rng.randint(1, 40) / 2,
            calories=float(rng.randint(0, 300)),
        )
        for i in range(size)
    )


@pytest.fixture
def random_catalogs() -> list[tuple[FoodCatalog, float]]:
    """Reproducible (catalog, capacity) pairs with up to 10 items."""
    rng = random.Random(42)
    cases = []
    for _ in range(40):
        catalog = make_random_catalog(rng, rng.randint(0, 10))
        capacity = rng.randint(0, 60) / 2
        cases.append((catalog, capacity))
    return cases


@pytest.fixture
def catalog_factory():
    """Return the random catalog builder."""
    return make_random_catalog
