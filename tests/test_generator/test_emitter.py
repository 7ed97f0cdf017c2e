"""Tests for apidocgen.generator.emitter -- JSDoc and declaration rendering."""

from __future__ import annotations

import pytest

from apidocgen.exceptions import WriteError
from apidocgen.generator.emitter import render_declaration, render_jsdoc
from apidocgen.models import EndpointMethod, EndpointRecord, HTTPMethod


def _record(api_path: str, relative_path: str, *methods: EndpointMethod) -> EndpointRecord:
    return EndpointRecord(api_path=api_path, relative_path=relative_path, methods=methods)


class TestRenderDeclaration:

    def test_worked_example(self) -> None:
        record = _record(
            "/api/Users/{id}/orders/{orderId}",
            "Users/{id}/orders/{orderId}",
            EndpointMethod(verb=HTTPMethod.GET, summary="Get an order"),
        )
        name, source = render_declaration(record)
        assert name == "Users_id_orders_orderId"
        assert source == (
            "/**\n"
            " * @path /api/Users/{id}/orders/{orderId}\n"
            " * @method get - Get an order\n"
            " * @param id\n"
            " * @param orderId\n"
            " */\n"
            "export const Users_id_orders_orderId = (id: any, orderId: any) => "
            "`Users/${id}/orders/${orderId}`;\n"
        )

    def test_without_parameters(self) -> None:
        record = _record("/api/Users", "Users", EndpointMethod(verb=HTTPMethod.GET))
        _, source = render_declaration(record)
        assert source.endswith("export const Users = () => `Users`;\n")
        assert "@param" not in source

    def test_reserved_parameter_and_digit_name(self) -> None:
        _, source = render_declaration(_record("/api/Users/{default}", "Users/{default}"))
        assert source.endswith(
            "export const Users_default = (default_: any) => `Users/${default_}`;\n"
        )
        name, source = render_declaration(_record("/api/2fa/verify", "2fa/verify"))
        assert name == "Api_2fa_verify"
        assert "export const Api_2fa_verify = () => `2fa/verify`;" in source

    def test_lowercase(self) -> None:
        record = _record("/api/Users/{id}", "Users/{id}")
        name, source = render_declaration(record, lowercase=True)
        assert name == "users_id"
        assert "`Users/${id}`" in source

    def test_unnamable_path_raises(self) -> None:
        with pytest.raises(WriteError, match="constant name"):
            render_declaration(_record("/api/{}", "{}"))


class TestRenderJsdoc:

    def test_every_verb_listed(self) -> None:
        record = _record(
            "/api/Users/{id}",
            "Users/{id}",
            EndpointMethod(verb=HTTPMethod.GET),
            EndpointMethod(verb=HTTPMethod.DELETE, summary="Remove"),
        )
        doc = render_jsdoc(record, ["id"])
        assert " * @method get\n" in doc
        assert " * @method delete - Remove\n" in doc

    def test_summary_cannot_close_comment(self) -> None:
        record = _record(
            "/api/x",
            "x",
            EndpointMethod(verb=HTTPMethod.GET, summary="evil */ summary\nline two"),
        )
        doc = render_jsdoc(record, [])
        assert doc.count("*/") == 1
        assert "evil *\\/ summary line two" in doc
