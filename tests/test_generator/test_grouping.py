"""Tests for apidocgen.generator.grouping."""

from __future__ import annotations

from typing import Any

from apidocgen.generator.grouping import group_key, group_records
from apidocgen.models import EndpointRecord
from apidocgen.parser.extractor import extract_endpoints


def _rec(relative: str) -> EndpointRecord:
    return EndpointRecord(api_path=f"/api/{relative}", relative_path=relative)


class TestGroupRecords:

    def test_groups_in_first_seen_order(self, swagger_raw: dict[str, Any]) -> None:
        groups = group_records(extract_endpoints(swagger_raw, "/api/"))
        assert [g.key for g in groups] == ["Users", "Products", "health"]

    def test_records_keep_input_order(self, swagger_raw: dict[str, Any]) -> None:
        users = group_records(extract_endpoints(swagger_raw, "/api/"))[0]
        assert [r.relative_path for r in users.records] == [
            "Users",
            "Users/{id}",
            "Users/{id}/orders/{orderId}",
        ]

    def test_interleaved_records_share_group(self) -> None:
        groups = group_records([_rec("Users"), _rec("Orders"), _rec("Users/{id}")])
        assert [g.key for g in groups] == ["Users", "Orders"]
        assert len(groups[0].records) == 2

    def test_case_sensitive_by_default(self) -> None:
        groups = group_records([_rec("Users"), _rec("users/{id}")])
        assert [g.key for g in groups] == ["Users", "users"]

    def test_lowercase_merges(self) -> None:
        groups = group_records([_rec("Users"), _rec("users/{id}")], lowercase=True)
        assert [g.key for g in groups] == ["users"]
        assert len(groups[0].records) == 2

    def test_empty(self) -> None:
        assert group_records([]) == []


def test_group_key() -> None:
    assert group_key(_rec("Users/{id}/orders")) == "Users"
    assert group_key(_rec("Users/{id}"), lowercase=True) == "users"
