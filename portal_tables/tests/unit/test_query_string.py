"""
Unit tests for query-string persistence.
"""

from unittest.mock import MagicMock

import pytest
from django.http import QueryDict

from portal_tables.core.columns import ColumnDescriptor
from portal_tables.core.state import TableParams
from portal_tables.query_string import (
    QueryDictStore,
    QueryStringSynchronizer,
    generate_search_parameters,
    to_query_params,
)
from portal_tables.testing import build_request

pytestmark = pytest.mark.unit

COLUMNS = (
    ColumnDescriptor("Name", field="name", is_default=True),
    ColumnDescriptor("Email", field="email"),
    ColumnDescriptor("Role", field="role", field_key="role__name"),
)

DEFAULTS = TableParams(page=0, per_page=10, sort_direction="desc", order_by="name")


class TestGenerateSearchParameters:
    def test_sets_non_default_values(self):
        params = generate_search_parameters(
            QueryDict("search=ali"), {"page": 3, "perPage": 20}, {"page": 1, "perPage": 10}
        )
        assert params["page"] == "3"
        assert params["perPage"] == "20"
        assert params["search"] == "ali"

    def test_prunes_values_equal_to_default(self):
        params = generate_search_parameters(
            QueryDict("page=3&perPage=20"), {"page": 1, "perPage": "10"}, {"page": "1", "perPage": 10}
        )
        assert "page" not in params
        assert "perPage" not in params

    def test_deletes_none_values(self):
        params = generate_search_parameters(QueryDict("orderBy=name"), {"orderBy": None}, {})
        assert "orderBy" not in params

    def test_does_not_mutate_input(self):
        original = QueryDict("page=3")
        generate_search_parameters(original, {"page": 1}, {"page": 1})
        assert original["page"] == "3"


class TestQueryDictStore:
    def test_set_and_delete_notify_on_change_only(self):
        on_change = MagicMock()
        store = QueryDictStore("page=2", on_change=on_change)

        store.set("page", 2)
        store.delete("missing")
        on_change.assert_not_called()

        store.set("page", 4)
        store.delete("page")
        assert [call.args[0] for call in on_change.call_args_list] == ["page=4", ""]

    def test_replace_reports_whether_anything_changed(self):
        store = QueryDictStore("page=2")
        assert store.replace(QueryDict("page=2")) is False
        assert store.replace(QueryDict("page=3")) is True
        assert store.get("page") == "3"

    def test_copy_is_detached(self):
        store = QueryDictStore("page=2")
        params = store.copy()
        params["page"] = "9"
        assert store.get("page") == "2"

    def test_from_request(self):
        store = QueryDictStore.from_request(build_request(query={"page": "2", "q": "x"}))
        assert store.get("page") == "2"
        assert store.has("q")

    def test_from_mapping(self):
        store = QueryDictStore.from_mapping({"page": 2, "sortDirection": "asc"})
        assert store.get("page") == "2"
        assert store.get("sortDirection") == "asc"


class TestQueryStringSynchronizer:
    def test_to_query_params_is_one_based(self):
        assert to_query_params(DEFAULTS)["page"] == 1

    def test_hydrates_valid_values(self):
        store = QueryDictStore("page=3&perPage=20&orderBy=email&sortDirection=asc")
        sync = QueryStringSynchronizer(store, DEFAULTS)

        updates = sync.hydrate(COLUMNS, (10, 20))

        assert updates == {"page": 2, "per_page": 20, "order_by": "email", "sort_direction": "asc"}
        assert sync.hydrated is True

    def test_order_by_matches_field_key(self):
        sync = QueryStringSynchronizer(QueryDictStore("orderBy=role__name"), DEFAULTS)
        assert sync.hydrate(COLUMNS, (10,)) == {"order_by": "role__name"}

    def test_ignores_invalid_values(self):
        store = QueryDictStore("perPage=15&orderBy=unknown&sortDirection=sideways")
        sync = QueryStringSynchronizer(store, DEFAULTS)
        assert sync.hydrate(COLUMNS, (10, 20)) == {}

    @pytest.mark.parametrize("raw", ["0", "-2", "abc", "2.5", ""])
    def test_invalid_page_is_deleted(self, raw):
        store = QueryDictStore(f"page={raw}&q=1")
        sync = QueryStringSynchronizer(store, DEFAULTS)

        assert sync.hydrate(COLUMNS, (10,)) == {}
        assert not store.has("page")
        assert store.get("q") == "1"

    def test_hydrates_once(self):
        store = QueryDictStore("page=3")
        sync = QueryStringSynchronizer(store, DEFAULTS)
        sync.hydrate(COLUMNS, (10,))
        assert sync.hydrate(COLUMNS, (10,)) == {}

    def test_write_round_trip(self):
        store = QueryDictStore("page=3&q=abc")
        sync = QueryStringSynchronizer(store, DEFAULTS)

        assert sync.write(TableParams(page=2, per_page=10, sort_direction="desc", order_by="name")) is False
        assert store.urlencode() == "page=3&q=abc"

        sync.write(TableParams(page=0, per_page=20, sort_direction="asc", order_by="email"))
        assert not store.has("page")
        assert store.get("perPage") == "20"
        assert store.get("orderBy") == "email"
        assert store.get("sortDirection") == "asc"
        assert store.get("q") == "abc"

    def test_disabled_without_store(self):
        sync = QueryStringSynchronizer(None, DEFAULTS)
        assert sync.enabled is False
        assert sync.hydrate(COLUMNS, (10,)) == {}
        assert sync.write(DEFAULTS) is False

    def test_disabled_flag_leaves_store_untouched(self):
        store = QueryDictStore("page=0")
        sync = QueryStringSynchronizer(store, DEFAULTS, enabled=False)
        sync.hydrate(COLUMNS, (10,))
        assert store.get("page") == "0"
