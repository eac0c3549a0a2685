"""Tests for loading the caret-delimited food database."""

from __future__ import annotations

import logging

import pytest

from maxcalorie.data.loader import FoodDatabaseLoader, load_food_database, split_record
from maxcalorie.optimizer.models import CatalogIOError, MalformedRecordError


class TestSplitRecord:
    """Tests for field splitting."""

    def test_three_fields(self):
        assert split_record("Apple^7^95") == ["Apple", "7", "95"]

    def test_trailing_delimiter_ignored(self):
        assert split_record("Apple^7^95^") == ["Apple", "7", "95"]

    def test_inner_empty_field_kept(self):
        assert split_record("^7^95") == ["", "7", "95"]

    def test_empty_line(self):
        assert split_record("") == []

    def test_custom_delimiter(self):
        assert split_record("Apple,7,95", delimiter=",") == ["Apple", "7", "95"]


class TestLoadFoodDatabase:
    """Tests for load_food_database."""

    def test_loads_sample(self, sample_db_path):
        catalog = load_food_database(sample_db_path)
        assert len(catalog) == 6
        assert catalog[0].description == "Chicken breast"
        assert catalog[0].weight == 6
        assert catalog[0].calories == 280
        assert catalog[-1].description == "Apple"

    def test_header_skipped(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("Bread^2^150\nRice^8^220\n")
        catalog = load_food_database(path)
        assert [item.description for item in catalog] == ["Rice"]

    def test_no_header(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("Bread^2^150\nRice^8^220\n")
        catalog = load_food_database(path, has_header=False)
        assert len(catalog) == 2

    def test_header_only(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("description^weight^calories\n")
        assert len(load_food_database(path)) == 0

    def test_bad_numbers_skipped(self, tmp_path, caplog):
        path = tmp_path / "foods.txt"
        path.write_text(
            "description^weight^calories\n"
            "Bread^2^150\n"
            "Mystery^heavy^100\n"
            "Soup^12^lots\n"
            "Rice^8^220\n"
        )
        with caplog.at_level(logging.DEBUG, logger="maxcalorie"):
            catalog = load_food_database(path)

        assert [item.description for item in catalog] == ["Bread", "Rice"]
        assert "line 3" in caplog.text
        assert "line 4" in caplog.text

    def test_invalid_items_skipped(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text(
            "description^weight^calories\n"
            "^2^150\n"
            "Air^0^0\n"
            "Antimatter^-1^5\n"
            "Rice^8^220\n"
        )
        catalog = load_food_database(path)
        assert [item.description for item in catalog] == ["Rice"]

    def test_negative_calories_kept(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("description^weight^calories\nCelery^4^-2\n")
        assert load_food_database(path)[0].calories == -2

    def test_whitespace_and_decimals(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("description^weight^calories\nOats^ 1.5 ^ 150.25\r\n")
        item = load_food_database(path)[0]
        assert item.weight == 1.5
        assert item.calories == 150.25

    def test_blank_lines_ignored(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("description^weight^calories\n\nBread^2^150\n\n")
        assert len(load_food_database(path)) == 1

    def test_wrong_field_count_aborts(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text(
            "description^weight^calories\n"
            "Bread^2^150\n"
            "Rice^8^220^extra\n"
        )
        with pytest.raises(MalformedRecordError) as exc_info:
            load_food_database(path)
        assert exc_info.value.line_number == 3
        assert exc_info.value.field_count == 4
        assert exc_info.value.line == "Rice^8^220^extra"

    def test_too_few_fields_aborts(self, tmp_path):
        path = tmp_path / "foods.txt"
        path.write_text("description^weight^calories\nBread^2\n")
        with pytest.raises(MalformedRecordError) as exc_info:
            load_food_database(path)
        assert exc_info.value.field_count == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogIOError):
            load_food_database(tmp_path / "missing.txt")

    def test_directory_is_io_error(self, tmp_path):
        with pytest.raises(CatalogIOError):
            load_food_database(tmp_path)

    def test_loader_class(self, tmp_path):
        path = tmp_path / "foods.csv"
        path.write_text("name,weight,calories\nBread,2,150\n")
        loader = FoodDatabaseLoader(path, delimiter=",")
        catalog = loader.load()
        assert catalog[0].description == "Bread"
