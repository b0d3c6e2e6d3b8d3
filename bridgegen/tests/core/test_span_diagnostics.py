# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from bridgegen.core.diagnostics import Diagnostic, diagnostic_to_json
from bridgegen.core.span import Span


def test_join_covers_both_spans() -> None:
	start = Span(file="a.rs", line=1, column=3, end_line=1, end_column=5)
	end = Span(file="a.rs", line=2, column=1, end_line=2, end_column=4)
	joined = start.join(end)
	assert (joined.line, joined.column, joined.end_line, joined.end_column) == (1, 3, 2, 4)
	assert joined.file == "a.rs"


def test_unknown_spans_are_absorbed() -> None:
	known = Span(line=4, column=2, end_line=4, end_column=9)
	assert known.join(Span()) == known
	assert Span().join(known) == known
	assert Span.covering([]) == Span()
	assert Span.covering([Span(), known, Span()]) == known


def test_end_is_zero_width() -> None:
	end = Span(line=1, column=1, end_line=1, end_column=7).end()
	assert (end.line, end.column, end.end_line, end.end_column) == (1, 7, 1, 7)
	assert Span().end() == Span()


def test_span_str() -> None:
	assert str(Span(file="a.rs", line=3, column=4)) == "a.rs:3:4"
	assert str(Span(line=3, column=4)) == "3:4"
	assert str(Span()) == "<unknown>"


def test_diagnostic_defaults_to_unknown_span() -> None:
	diag = Diagnostic(message="boom")
	assert diag.span == Span()
	assert diagnostic_to_json(diag, phase="parser", file="x.rs") == {
		"phase": "parser",
		"code": None,
		"message": "boom",
		"severity": "error",
		"file": "x.rs",
		"line": None,
		"column": None,
		"notes": [],
	}
