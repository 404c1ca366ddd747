"""Tests for tree/adapter.py node helpers."""

from __future__ import annotations

from typing import Any

import pytest

from flowtree.core.errors import ErrorCode
from flowtree.tree.adapter import (
    MissingFieldError,
    line_of,
    named_children,
    node_text,
    require_field,
    span_text,
)


class TestText:
    def test_node_text_decodes_utf8(self, fake_source: Any) -> None:
        src = fake_source('puts("héllo");')
        node = src.node("expression_statement", 'puts("héllo");')
        assert node_text(node, src.source) == 'puts("héllo");'

    def test_span_text_covers_min_to_max(self, fake_source: Any) -> None:
        src = fake_source("for (i = 0; i < n; i++)")
        parts = [src.node("update_expression", "i++"), src.node("assignment_expression", "i = 0")]
        assert span_text(parts, src.source) == "i = 0; i < n; i++"

    def test_span_text_empty(self) -> None:
        assert span_text([], b"anything") == ""


class TestFields:
    def test_require_field_returns_child(self, fake_source: Any) -> None:
        src = fake_source("while (x) y();")
        body = src.node("expression_statement", "y();")
        loop = src.node("while_statement", src.text, body=body)
        assert require_field(loop, "body") is body

    def test_require_field_raises(self, fake_source: Any) -> None:
        src = fake_source("while (x) y();")
        loop = src.node("while_statement", src.text)
        with pytest.raises(MissingFieldError) as exc_info:
            require_field(loop, "condition")
        assert exc_info.value.field_name == "condition"
        assert "while_statement" in str(exc_info.value)

    def test_missing_field_to_warning(self, fake_source: Any) -> None:
        src = fake_source("a();\nb();\nwhile;")
        loop = src.node("while_statement", "while;")

        warning = MissingFieldError(loop, "body").to_warning(src.source)

        assert warning.code == ErrorCode.MISSING_FIELD
        assert warning.node_type == "while_statement"
        assert warning.start_byte == 10
        assert warning.line == 3

    def test_named_children_in_order(self, fake_source: Any) -> None:
        src = fake_source("{ a(); b(); }")
        a = src.node("expression_statement", "a();")
        b = src.node("expression_statement", "b();")
        block = src.node("compound_statement", src.text, b, a)
        assert list(named_children(block)) == [a, b]

    def test_line_of_first_line(self, fake_source: Any) -> None:
        src = fake_source("x;")
        assert line_of(src.node("expression_statement", "x;"), src.source) == 1
