# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration parser for foreign blocks.

Every `parse_*` function takes a ParseStream positioned at the start of the
construct, consumes exactly that construct and returns its node; failures are
StructuralParseErrors anchored on the offending token.

Two item shapes are deliberately not typed here and come back as
ForeignItemVerbatim: `type` items carrying anything between the name and the
`;` (`type B = C;`, `type A: Bound;`, `type A<T>;`) and functions with a body.
"""

from __future__ import annotations

from typing import List

from bridgegen.core.span import Span

from .ast import (
	AnyForeignItem,
	Attribute,
	FnArg,
	ForeignItemFn,
	ForeignItemMacro,
	ForeignItemStatic,
	ForeignItemType,
	ForeignItemVerbatim,
	ItemForeignMod,
	Pat,
	PatIdent,
	PatLit,
	PatReference,
	PatTuple,
	PatType,
	PatWild,
	Receiver,
	Signature,
	TypeExpr,
	Visibility,
	VisibilityKind,
)
from .stream import ParseStream
from .tokens import Delimiter, Group, Ident, Punct, TokenStream

# `pub(<scope>)` forms; any other parenthesised group after `pub` is not ours.
_RESTRICTED_SCOPES = frozenset({"crate", "self", "super", "in"})


def _span_since(input: ParseStream, start: int) -> Span:
	return input.tokens_since(start).span


# --- attributes and visibility ------------------------------------------


def parse_outer_attributes(input: ParseStream) -> List[Attribute]:
	attrs: List[Attribute] = []
	while input.peek_punct("#") and not input.peek_punct("!", offset=1):
		attrs.append(_parse_attribute(input, style="outer"))
	return attrs


def parse_inner_attributes(input: ParseStream) -> List[Attribute]:
	attrs: List[Attribute] = []
	while input.peek_punct("#") and input.peek_punct("!", offset=1):
		attrs.append(_parse_attribute(input, style="inner"))
	return attrs


def _parse_attribute(input: ParseStream, *, style: str) -> Attribute:
	start = input.position
	input.expect_punct("#")
	if style == "inner":
		input.expect_punct("!")
	_bracket, content = input.parse_group(Delimiter.BRACKET)
	path = _parse_attr_path(content)
	meta = content.rest()
	content.step_to_end()
	tokens = input.tokens_since(start)
	return Attribute(style=style, path=path, meta=meta, tokens=tokens, span=tokens.span)


def _parse_attr_path(content: ParseStream) -> str:
	if content.peek_punct("::"):
		content.expect_punct("::")
	segments = [_parse_any_ident(content, "expected attribute path").text]
	while content.peek_punct("::"):
		content.expect_punct("::")
		segments.append(_parse_any_ident(content, "expected attribute path segment").text)
	return "::".join(segments)


def _parse_any_ident(input: ParseStream, message: str) -> Ident:
	# Keywords are allowed here (`#[unsafe(...)]`, `pub(in self::x)`).
	if not input.peek_ident():
		raise input.error(message)
	return input.advance()  # type: ignore[return-value]


def parse_visibility(input: ParseStream) -> Visibility:
	if not input.peek_ident("pub"):
		return Visibility()
	start = input.position
	input.advance()
	if input.peek_group(Delimiter.PAREN):
		group = input.peek()
		inner = group.stream  # type: ignore[union-attr]
		first = inner[0] if len(inner) else None
		if isinstance(first, Ident) and first.text in _RESTRICTED_SCOPES:
			if first.text == "in" and len(inner) < 2:
				raise input.error("expected path after `pub(in`", span=first.span)
			if first.text != "in" and len(inner) != 1:
				raise input.error("unexpected token in visibility scope", span=inner[1].span)
			input.advance()
			return Visibility(VisibilityKind.RESTRICTED, input.tokens_since(start))
	return Visibility(VisibilityKind.PUBLIC, input.tokens_since(start))


# --- types --------------------------------------------------------------


def parse_type(input: ParseStream, *, stop: str = ",;", stop_words: frozenset[str] = frozenset()) -> TypeExpr:
	"""
	Collect a type verbatim, up to a top-level stop punctuation, a stop word,
	a brace group, or the end of input.

	`<`/`>` are not delimiters at the token level, so generic arguments are
	tracked with a depth counter; the `>` of `->` does not close anything.
	"""
	start = input.position
	depth = 0
	while not input.is_empty():
		tree = input.peek()
		if depth == 0:
			if isinstance(tree, Punct) and tree.char in stop:
				break
			if isinstance(tree, Ident) and tree.text in stop_words:
				break
			if input.peek_group(Delimiter.BRACE):
				break
		if input.peek_punct("->"):
			input.advance()
			input.advance()
			continue
		if isinstance(tree, Punct):
			if tree.char == "<":
				depth += 1
			elif tree.char == ">":
				if depth == 0:
					raise input.error("unexpected `>` in type")
				depth -= 1
		input.advance()
	tokens = input.tokens_since(start)
	if not tokens:
		raise input.error("expected type")
	if depth:
		raise input.error("unclosed `<` in type")
	return TypeExpr(tokens, tokens.span)


def _collect_generics(input: ParseStream) -> TokenStream:
	if not input.peek_punct("<"):
		return TokenStream()
	start = input.position
	depth = 0
	while True:
		if input.is_empty():
			raise input.error("unclosed generic parameter list")
		tree = input.advance()
		if isinstance(tree, Punct):
			if tree.char == "<":
				depth += 1
			elif tree.char == ">":
				depth -= 1
				if depth == 0:
					return input.tokens_since(start)


# --- patterns -----------------------------------------------------------


def parse_pat(input: ParseStream) -> Pat:
	start = input.position
	if input.peek_punct("&"):
		and_token = input.advance()
		mutability = input.advance() if input.peek_ident("mut") else None
		pat = parse_pat(input)
		return PatReference(and_token, pat, mutability, _span_since(input, start))  # type: ignore[arg-type]
	if input.peek_ident("_"):
		input.advance()
		return PatWild(_span_since(input, start))
	if input.peek_group(Delimiter.PAREN):
		_group, content = input.parse_group(Delimiter.PAREN)
		elems: List[Pat] = []
		while not content.is_empty():
			elems.append(parse_pat(content))
			if content.is_empty():
				break
			content.expect_punct(",")
		return PatTuple(elems, _span_since(input, start))
	if input.peek_literal():
		lit = input.parse_literal()
		return PatLit(lit, _span_since(input, start))
	if input.peek_ident():
		by_ref = input.advance() if input.peek_ident("ref") else None
		mutability = input.advance() if input.peek_ident("mut") else None
		if input.peek_ident("self"):
			ident = input.advance()
		else:
			ident = input.parse_ident()
		subpat = None
		if input.peek_punct("@"):
			input.advance()
			subpat = parse_pat(input)
		return PatIdent(
			ident=ident,  # type: ignore[arg-type]
			by_ref=by_ref,  # type: ignore[arg-type]
			mutability=mutability,  # type: ignore[arg-type]
			subpat=subpat,
			span=_span_since(input, start),
		)
	raise input.error("expected pattern")


# --- function arguments and signatures ----------------------------------


def _peek_receiver(input: ParseStream) -> bool:
	"""
	True for the shorthand forms `self`, `mut self`, `&self`, `&mut self`,
	`&'a self`, `&'a mut self`: a `self` that ends the argument.
	"""
	ahead = input.fork()
	if ahead.peek_punct("&"):
		ahead.advance()
		if ahead.peek_punct("'"):
			ahead.advance()
			ahead.advance()
	if ahead.peek_ident("mut"):
		ahead.advance()
	if not ahead.peek_ident("self"):
		return False
	ahead.advance()
	return ahead.is_empty() or ahead.peek_punct(",")


def parse_fn_arg(input: ParseStream) -> FnArg:
	start = input.position
	attrs = parse_outer_attributes(input)
	if _peek_receiver(input):
		reference = input.advance() if input.peek_punct("&") else None
		lifetime = None
		if reference is not None and input.peek_punct("'"):
			input.advance()
			lifetime = input.advance()
		mutability = input.advance() if input.peek_ident("mut") else None
		self_token = input.expect_keyword("self")
		return Receiver(
			self_token=self_token,
			attrs=attrs,
			reference=reference,  # type: ignore[arg-type]
			lifetime=lifetime,  # type: ignore[arg-type]
			mutability=mutability,  # type: ignore[arg-type]
			span=_span_since(input, start),
		)
	pat = parse_pat(input)
	input.expect_punct(":")
	ty = parse_type(input, stop=",")
	return PatType(pat=pat, ty=ty, attrs=attrs, span=_span_since(input, start))


def parse_signature(input: ParseStream) -> Signature:
	start = input.position
	unsafety = input.expect_keyword("unsafe") if input.peek_ident("unsafe") else None
	fn_token = input.expect_keyword("fn")
	ident = input.parse_ident()
	generics = _collect_generics(input)
	_paren, content = input.parse_group(Delimiter.PAREN)
	inputs: List[FnArg] = []
	while not content.is_empty():
		inputs.append(parse_fn_arg(content))
		if content.is_empty():
			break
		content.expect_punct(",")
	output = None
	if input.peek_punct("->"):
		input.expect_punct("->")
		output = parse_type(input, stop=";", stop_words=frozenset({"where"}))
	where_clause = TokenStream()
	if input.peek_ident("where"):
		where_start = input.position
		input.advance()
		while not input.is_empty() and not input.peek_punct(";") and not input.peek_group(Delimiter.BRACE):
			input.advance()
		where_clause = input.tokens_since(where_start)
	return Signature(
		fn_token=fn_token,
		ident=ident,
		inputs=inputs,
		output=output,
		unsafety=unsafety,
		generics=generics,
		where_clause=where_clause,
		span=_span_since(input, start),
	)


# --- foreign items ------------------------------------------------------


def parse_foreign_item(input: ParseStream) -> AnyForeignItem:
	start = input.position
	attrs = parse_outer_attributes(input)
	vis = parse_visibility(input)
	if input.peek_ident("fn") or (input.peek_ident("unsafe") and input.peek_ident("fn", offset=1)):
		sig = parse_signature(input)
		if input.peek_group(Delimiter.BRACE):
			input.advance()
			return _verbatim_since(input, start)
		input.expect_punct(";")
		return ForeignItemFn(attrs=attrs, vis=vis, sig=sig, span=_span_since(input, start))
	if input.peek_ident("type"):
		type_token = input.expect_keyword("type")
		ident = input.parse_ident()
		if input.peek_punct(";"):
			input.advance()
			return ForeignItemType(
				attrs=attrs,
				vis=vis,
				type_token=type_token,
				ident=ident,
				span=_span_since(input, start),
			)
		# `type B = C;` and friends are not a foreign type to the grammar.
		while not input.peek_punct(";"):
			if input.is_empty():
				raise input.error("expected `;`")
			input.advance()
		input.advance()
		return _verbatim_since(input, start)
	if input.peek_ident("static"):
		input.advance()
		mutability = input.advance() if input.peek_ident("mut") else None
		ident = input.parse_ident()
		input.expect_punct(":")
		ty = parse_type(input, stop=";")
		input.expect_punct(";")
		return ForeignItemStatic(
			attrs=attrs,
			vis=vis,
			ident=ident,
			ty=ty,
			mutability=mutability,  # type: ignore[arg-type]
			span=_span_since(input, start),
		)
	if vis.is_inherited and input.peek_ident() and _peek_macro_call(input):
		return _parse_foreign_macro(input, attrs, start)
	raise input.error("expected foreign item")


def _peek_macro_call(input: ParseStream) -> bool:
	ahead = input.fork()
	ahead.advance()
	while ahead.peek_punct("::"):
		ahead.advance()
		ahead.advance()
		if not ahead.peek_ident():
			return False
		ahead.advance()
	return ahead.peek_punct("!") and isinstance(ahead.peek(1), Group)


def _parse_foreign_macro(input: ParseStream, attrs: List[Attribute], start: int) -> ForeignItemMacro:
	segments = [input.advance().text]  # type: ignore[union-attr]
	while input.peek_punct("::"):
		input.expect_punct("::")
		segments.append(input.parse_ident().text)
	input.expect_punct("!")
	body = input.advance()
	if body.delimiter is not Delimiter.BRACE:  # type: ignore[union-attr]
		input.expect_punct(";")
	elif input.peek_punct(";"):
		input.advance()
	return ForeignItemMacro(
		attrs=attrs,
		path="::".join(segments),
		body=body,  # type: ignore[arg-type]
		span=_span_since(input, start),
	)


def _verbatim_since(input: ParseStream, start: int) -> ForeignItemVerbatim:
	tokens = input.tokens_since(start)
	return ForeignItemVerbatim(tokens=tokens, span=tokens.span)


def parse_item_foreign_mod(input: ParseStream) -> ItemForeignMod:
	"""`#[attrs] extern "ABI" { #![attrs] items }`"""
	start = input.position
	attrs = parse_outer_attributes(input)
	extern_token = input.expect_keyword("extern")
	abi = None
	if input.peek_literal():
		abi = input.parse_literal()
		if not abi.is_string:
			raise input.error("expected ABI string", span=abi.span)
	brace, content = input.parse_group(Delimiter.BRACE)
	attrs.extend(parse_inner_attributes(content))
	items: List[AnyForeignItem] = []
	while not content.is_empty():
		items.append(parse_foreign_item(content))
	return ItemForeignMod(
		attrs=attrs,
		extern_token=extern_token,
		brace=brace,
		items=items,
		abi=abi,
		span=_span_since(input, start),
	)


__all__ = [
	"parse_fn_arg",
	"parse_foreign_item",
	"parse_inner_attributes",
	"parse_item_foreign_mod",
	"parse_outer_attributes",
	"parse_pat",
	"parse_signature",
	"parse_type",
	"parse_visibility",
]
