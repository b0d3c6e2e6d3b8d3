# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from bridgegen.syntax.tokens import Delimiter, Group, Ident, Literal, Punct, TokenStream, lex


def test_path_type_renders_like_token_printer() -> None:
	assert str(lex("&qobject::T")) == "& qobject :: T"


def test_signature_renders_groups_and_joint_arrow() -> None:
	assert str(lex("fn foo(a: A) -> B;")) == "fn foo (a : A) -> B ;"
	assert str(lex("extern \"C++\" { type A; }")) == "extern \"C++\" { type A ; }"


def test_lifetime_is_joint_quote_and_ident() -> None:
	stream = lex("&'a T")
	assert [type(tree) for tree in stream] == [Punct, Punct, Ident, Ident]
	assert stream[1].char == "'"
	assert stream[1].joint
	assert stream[2].text == "a"
	assert str(stream) == "&'a T"


def test_char_literal_is_not_a_lifetime() -> None:
	stream = lex("'a' 'b")
	assert isinstance(stream[0], Literal)
	assert stream[0].text == "'a'"
	assert isinstance(stream[1], Punct)
	assert isinstance(stream[2], Ident)


def test_groups_nest_and_keep_their_delimiters() -> None:
	stream = lex("(a, [b; 2], {c})")
	assert len(stream) == 1
	group = stream[0]
	assert isinstance(group, Group)
	assert group.delimiter is Delimiter.PAREN
	inner = list(group.stream)
	assert len(inner) == 5
	assert inner[2].delimiter is Delimiter.BRACKET
	assert inner[4].delimiter is Delimiter.BRACE
	# The `;` inside the bracket group stays inside it.
	assert not any(isinstance(tree, Punct) and tree.char == ";" for tree in group.stream)


def test_string_literals_and_comments() -> None:
	stream = lex('extern "C++" // trailing\n/* block */ { }')
	assert len(stream) == 3
	assert isinstance(stream[1], Literal)
	assert stream[1].is_string
	assert stream[1].text == '"C++"'


def test_spans_are_one_based_and_carry_file() -> None:
	stream = lex("type A;\n  type B;", file="bridge.rs")
	second_type = stream[3]
	assert second_type.text == "type"
	assert second_type.span.file == "bridge.rs"
	assert (second_type.span.line, second_type.span.column) == (2, 3)
	assert (second_type.span.end_line, second_type.span.end_column) == (2, 7)


def test_group_span_covers_delimiters() -> None:
	group = lex("x (a)")[1]
	assert (group.span.column, group.span.end_column) == (3, 6)


def test_empty_source_is_empty_stream() -> None:
	stream = lex("")
	assert len(stream) == 0
	assert not stream
	assert str(stream) == ""


def test_stream_slicing_and_concat() -> None:
	stream = lex("a b c")
	assert isinstance(stream[1:], TokenStream)
	assert str(stream[1:]) == "b c"
	assert str(TokenStream.concat([stream[:1], stream[2:]])) == "a c"
	assert stream == lex("a b c")


@pytest.mark.parametrize("source", ["fn foo(", "fn foo)", "type A = [u8;", "`"])
def test_unbalanced_or_unknown_input_is_rejected(source: str) -> None:
	with pytest.raises(UnexpectedInput):
		lex(source)
