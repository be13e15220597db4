"""Tests for namestore.core.comparers module."""

import pytest

from namestore.core.comparers import (
    IGNORE_CASE,
    ORDINAL,
    CaseInsensitiveComparer,
    KeyComparer,
    OrdinalComparer,
    get_comparer,
)
from namestore.core.errors import InvalidConfigError
from namestore.core.store import NameValueStore


class TestCaseInsensitiveComparer:
    def test_equals_ignores_case(self):
        assert IGNORE_CASE.equals("Data Source", "DATA SOURCE")
        assert not IGNORE_CASE.equals("a", "b")

    def test_hash_consistent_with_equals(self):
        assert IGNORE_CASE.hash("Provider") == IGNORE_CASE.hash("pROVIDER")

    def test_none_only_equals_none(self):
        assert IGNORE_CASE.equals(None, None)
        assert not IGNORE_CASE.equals(None, "a")
        assert not IGNORE_CASE.equals("a", None)


class TestOrdinalComparer:
    def test_equals_is_exact(self):
        assert ORDINAL.equals("a", "a")
        assert not ORDINAL.equals("a", "A")
        assert ORDINAL.equals(None, None)
        assert not ORDINAL.equals(None, "a")

    def test_hash(self):
        assert ORDINAL.hash("a") == hash("a")


class TestKeyComparerProtocol:
    def test_stock_comparers_satisfy_protocol(self):
        assert isinstance(CaseInsensitiveComparer(), KeyComparer)
        assert isinstance(OrdinalComparer(), KeyComparer)

    def test_custom_comparer_used_by_store(self):
        """A store honours any equality+hash pair."""

        class StripComparer:
            def equals(self, x, y):
                if x is None or y is None:
                    return x is y
                return x.strip() == y.strip()

            def hash(self, key):
                return hash(key.strip())

        store = NameValueStore(StripComparer())
        store.add(" key ", 1)
        store.add("key", 2)
        assert store.get("key") == 1
        store.remove("  key")
        assert store.count == 0


class TestGetComparer:
    def test_known_names(self):
        assert get_comparer("ignore_case") is IGNORE_CASE
        assert get_comparer("ordinal") is ORDINAL

    def test_unknown_name(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            get_comparer("fuzzy")
        assert exc_info.value.context.metadata["config_key"] == "comparer"
