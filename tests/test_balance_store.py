"""Unit tests for balance persistence."""

import json

import pytest


class TestBalanceStore:
    """Test the single-scalar balance file."""

    def test_missing_file_gives_starting_balance(self, store):
        assert store.load() == 1000.0

    def test_round_trip(self, store):
        store.save(123.456)
        assert store.load() == pytest.approx(123.46)

    def test_stored_under_fixed_key(self, store):
        store.save(42.0)
        with open(store.path, "r", encoding="utf-8") as f:
            assert json.load(f) == {"mines_mock_balance": "42.00"}

    @pytest.mark.parametrize("content", [
        "not json",
        "[]",
        '{"other": "10"}',
        '{"mines_mock_balance": "abc"}',
        '{"mines_mock_balance": "nan"}',
        '{"mines_mock_balance": null}',
    ])
    def test_corrupt_file_gives_starting_balance(self, store, content):
        store.path.write_text(content, encoding="utf-8")
        assert store.load() == 1000.0
