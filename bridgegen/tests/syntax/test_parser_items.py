# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from bridgegen.syntax.ast import (
	ForeignItemKind,
	ForeignItemMacro,
	ForeignItemStatic,
	ForeignItemType,
	PatIdent,
	PatReference,
	PatTuple,
	PatType,
	Receiver,
	VisibilityKind,
)
from bridgegen.syntax.errors import StructuralParseError
from bridgegen.syntax.parser import parse_foreign_item
from bridgegen.test_support import foreign_fn, foreign_mod, tokens_to_syn

BRIDGE_BLOCK = """
extern "C++" {
	#![namespace = "ns"]

	#[namespace = "a"]
	type A;

	#[cxx_name = "D"]
	type B = C;

	fn foo(self: &qobject::T, a: A) -> B;
	fn helper() {}
	static COUNT: i32;
	include!("header.h");
}
"""


def test_foreign_mod_items_keep_source_order_and_kinds() -> None:
	item = foreign_mod(BRIDGE_BLOCK)
	assert item.abi_name == "C++"
	assert item.unsafety is None
	assert [attr.path for attr in item.attrs] == ["namespace"]
	assert item.attrs[0].style == "inner"
	assert [child.kind for child in item.items] == [
		ForeignItemKind.TYPE,
		ForeignItemKind.VERBATIM,
		ForeignItemKind.FN,
		ForeignItemKind.VERBATIM,
		ForeignItemKind.STATIC,
		ForeignItemKind.MACRO,
	]


def test_type_alias_is_kept_verbatim_with_its_attributes() -> None:
	item = foreign_mod(BRIDGE_BLOCK)
	verbatim = item.items[1]
	assert str(verbatim.tokens) == '# [cxx_name = "D"] type B = C ;'


def test_static_and_macro_items() -> None:
	item = foreign_mod(BRIDGE_BLOCK)
	static = item.items[4]
	assert isinstance(static, ForeignItemStatic)
	assert static.ident.text == "COUNT"
	assert str(static.ty) == "i32"
	macro = item.items[5]
	assert isinstance(macro, ForeignItemMacro)
	assert macro.path == "include"
	assert str(macro.body) == '("header.h")'


def test_attribute_path_and_meta() -> None:
	item = foreign_mod(BRIDGE_BLOCK)
	attr = item.items[0].attrs[0]
	assert attr.style == "outer"
	assert attr.path == "namespace"
	assert str(attr.meta) == '= "a"'


@pytest.mark.parametrize(
	"source, kind, text",
	[
		("type A;", VisibilityKind.INHERITED, ""),
		("pub type A;", VisibilityKind.PUBLIC, "pub"),
		("pub(crate) type A;", VisibilityKind.RESTRICTED, "pub (crate)"),
		("pub(in a::b) type A;", VisibilityKind.RESTRICTED, "pub (in a :: b)"),
	],
)
def test_visibility_variants(source: str, kind: VisibilityKind, text: str) -> None:
	item = tokens_to_syn(source, parse_foreign_item)
	assert isinstance(item, ForeignItemType)
	assert item.vis.kind is kind
	assert str(item.vis) == text


@pytest.mark.parametrize("source", ["type A: Bound;", "type A<T> = B<T>;", "type A = [u8; 4];"])
def test_type_items_with_trailing_syntax_are_verbatim(source: str) -> None:
	item = tokens_to_syn(source, parse_foreign_item)
	assert item.kind is ForeignItemKind.VERBATIM


def test_signature_with_self_type_and_return() -> None:
	sig = foreign_fn("fn foo(self: &qobject::T, a: A) -> B;").sig
	assert sig.ident.text == "foo"
	assert len(sig.inputs) == 2
	first = sig.inputs[0]
	assert isinstance(first, PatType)
	assert isinstance(first.pat, PatIdent)
	assert first.pat.ident.text == "self"
	assert str(first.ty) == "& qobject :: T"
	assert str(sig.output) == "B"


def test_signature_generics_unsafety_and_where_clause() -> None:
	sig = foreign_fn("unsafe fn get<T>(self: &Box<T>) -> Vec<Vec<T>> where T: Clone;").sig
	assert sig.unsafety is not None
	assert str(sig.generics) == "< T >"
	assert str(sig.inputs[0].ty) == "& Box < T >"
	assert str(sig.output) == "Vec < Vec < T >>"
	assert str(sig.where_clause) == "where T : Clone"


def test_fn_pointer_return_type_is_not_cut_at_arrow() -> None:
	sig = foreign_fn("fn callback(self: &T) -> fn(i32) -> i32;").sig
	assert str(sig.output) == "fn (i32) -> i32"


@pytest.mark.parametrize(
	"source, reference, mutability",
	[
		("fn foo(self);", False, False),
		("fn foo(mut self);", False, True),
		("fn foo(&self);", True, False),
		("fn foo(&mut self);", True, True),
	],
)
def test_shorthand_receivers(source: str, reference: bool, mutability: bool) -> None:
	arg = foreign_fn(source).sig.inputs[0]
	assert isinstance(arg, Receiver)
	assert (arg.reference is not None) == reference
	assert (arg.mutability is not None) == mutability


def test_receiver_with_lifetime() -> None:
	arg = foreign_fn("fn foo(&'a mut self);").sig.inputs[0]
	assert isinstance(arg, Receiver)
	assert arg.lifetime is not None
	assert arg.lifetime.text == "a"
	assert arg.mutability is not None


def test_typed_patterns() -> None:
	sig = foreign_fn("fn foo(mut self: T, #[attr] (a, b): (A, B), &c: &C);").sig
	first, second, third = sig.inputs
	assert isinstance(first.pat, PatIdent)
	assert first.pat.mutability is not None
	assert [attr.path for attr in second.attrs] == ["attr"]
	assert isinstance(second.pat, PatTuple)
	assert len(second.pat.elems) == 2
	assert isinstance(third.pat, PatReference)


@pytest.mark.parametrize(
	"source, message",
	[
		('extern "C++" { type A }', "expected `;`"),
		('extern "C++" { struct S; }', "expected foreign item"),
		('extern 42 { }', "expected ABI string"),
		('extern "C++" { fn foo(a); }', "expected `:`"),
		('extern "C++" { #[] type A; }', "expected attribute path"),
	],
)
def test_malformed_blocks_raise(source: str, message: str) -> None:
	with pytest.raises(StructuralParseError, match=message):
		foreign_mod(source)
