# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Extraction helpers for foreign (`extern`) blocks.

The declaration grammar cannot tell `type B = C;` apart from unrelated item
syntax, so such items reach us as ForeignItemVerbatim tokens and are re-parsed
here by hand. Likewise an `unsafe extern` block arrives as plain tokens and is
normalized into an ItemForeignMod.

"Not applicable" is always `None`; real problems are always raised
(StructuralParseError / ReceiverValidationError), never folded into `None`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

from bridgegen.core.span import Span

from .ast import (
	AnyForeignItem,
	ForeignItemKind,
	ForeignItemType,
	ItemForeignMod,
	PatIdent,
	PatType,
	Signature,
	TypeExpr,
)
from .errors import ReceiverValidationError
from .parser import parse_item_foreign_mod, parse_outer_attributes, parse_visibility
from .stream import ParseStream, parse_all
from .tokens import Ident, Punct, TokenStream

SELF_IDENT = "self"


def _foreign_item_to_type(item: AnyForeignItem) -> Optional[ForeignItemType]:
	"""
	Return the ForeignItemType for `item` if there is one, ignoring any extra
	syntax after the name in `type A = ...`.
	"""
	kind = item.kind
	if kind is ForeignItemKind.TYPE:
		# type A;
		return replace(item, attrs=list(item.attrs))  # type: ignore[arg-type,call-arg]
	if kind is ForeignItemKind.VERBATIM:
		# Verbatim when there is a `= Y` after the type, or something else entirely.
		return verbatim_to_foreign_type(item.tokens)  # type: ignore[union-attr]
	return None


def foreign_mod_to_foreign_item_types(foreign_mod: ItemForeignMod) -> List[ForeignItemType]:
	"""
	Collect the type declarations of a foreign block, in source order.

	Verbatim type aliases are reduced to plain `type A;` declarations; every
	other item is skipped. The first structural error aborts the whole call.
	The returned items are fresh copies; the module is left untouched.
	"""
	types: List[ForeignItemType] = []
	for item in foreign_mod.items:
		foreign_type = _foreign_item_to_type(item)
		if foreign_type is not None:
			types.append(foreign_type)
	return types


def _peek_extern_block(input: ParseStream) -> bool:
	"""`[unsafe] extern` ahead of the cursor; the rest is up to the block parser."""
	offset = 1 if input.peek_ident("unsafe") else 0
	return input.peek_ident("extern", offset=offset)


def verbatim_to_foreign_mod(tokens: TokenStream) -> Optional[ItemForeignMod]:
	"""
	Return the ItemForeignMod for a verbatim `unsafe extern` block if there is
	one, dropping the `unsafe` qualifier from the token shape.

	Attributes written before `unsafe` come first in the result, followed by
	the block's own attributes.
	"""

	def _parse(input: ParseStream) -> Optional[ItemForeignMod]:
		# Parse any attributes on the outside of the unsafe extern block
		attrs = parse_outer_attributes(input)

		if _peek_extern_block(input):
			unsafety = input.expect_keyword("unsafe") if input.peek_ident("unsafe") else None
			foreign_mod = parse_item_foreign_mod(input)
			return replace(
				foreign_mod,
				attrs=attrs + foreign_mod.attrs,
				unsafety=unsafety,
				span=tokens.span,
			)

		# Move the cursor past all remaining tokens, otherwise parse_all fails
		input.step_to_end()
		return None

	return parse_all(tokens, _parse)


def verbatim_to_foreign_type(tokens: TokenStream) -> Optional[ForeignItemType]:
	"""
	Return the ForeignItemType for verbatim `type A = ...;` tokens if there is
	one. Everything between the name and the `;` is discarded.
	"""

	def _parse(input: ParseStream) -> Optional[ForeignItemType]:
		attrs = parse_outer_attributes(input)
		vis = parse_visibility(input)
		if not input.peek_ident("type"):
			input.step_to_end()
			return None

		type_token = input.expect_keyword("type")
		ident = input.parse_ident()

		# Read until the next semicolon
		scan_start = input.span()
		while True:
			tree = input.peek()
			if tree is None:
				raise input.error("no `;` was found after this point", span=scan_start)
			input.advance()
			if isinstance(tree, Punct) and tree.char == ";":
				break

		return ForeignItemType(
			attrs=attrs,
			vis=vis,
			type_token=type_token,
			ident=ident,
			span=Span.covering([*(attr.span for attr in attrs), vis.tokens.span, type_token.span, ident.span]),
		)

	return parse_all(tokens, _parse)


@dataclass
class ForeignFnSelf:
	"""The `self: Type` receiver of a foreign function."""

	ident: Ident
	typ: TypeExpr


def self_type_from_foreign_fn(signature: Signature) -> ForeignFnSelf:
	"""
	Validate that `signature` starts with a `self: Type` argument and return it.

	Only the first argument is inspected. The shorthand receivers (`self`,
	`&self`, `&mut self`), `mut self: T` and attributes on the argument are all
	rejected.
	"""
	span = signature.span
	if signature.inputs:
		arg = signature.inputs[0]
		span = arg.span
		if isinstance(arg, PatType):
			if arg.attrs:
				raise ReceiverValidationError(
					"Attributes on the `self:` receiver are not supported",
					span=arg.span,
				)
			pat = arg.pat
			# It should be a `self:` value, without `mut` or `&`
			if (
				isinstance(pat, PatIdent)
				and pat.ident.text == SELF_IDENT
				and not pat.attrs
				and pat.mutability is None
				and pat.by_ref is None
				and pat.subpat is None
			):
				return ForeignFnSelf(ident=pat.ident, typ=arg.ty)
	raise ReceiverValidationError(
		"Expected first argument to be a `self:` receiver",
		span=span,
	)


__all__ = [
	"ForeignFnSelf",
	"foreign_mod_to_foreign_item_types",
	"self_type_from_foreign_fn",
	"verbatim_to_foreign_mod",
	"verbatim_to_foreign_type",
]
