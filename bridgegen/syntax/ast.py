# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax nodes for foreign (`extern`) blocks and the signatures inside them.

Nodes keep the token trees they were parsed from (identifiers, keywords,
verbatim type tokens) so spans survive into diagnostics and downstream
emitters can print exactly what the user wrote.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, List, Optional, Union

from bridgegen.core.span import Span

from .tokens import Group, Ident, Literal, Punct, TokenStream


@dataclass
class Attribute:
	"""
	`#[path meta...]` (outer) or `#![path meta...]` (inner).

	Only the shape is recorded; what a given path means is up to the consumer.
	"""

	style: str  # "outer" | "inner"
	path: str
	meta: TokenStream
	tokens: TokenStream
	span: Span = field(default_factory=Span)

	def __str__(self) -> str:
		return str(self.tokens)


class VisibilityKind(Enum):
	INHERITED = auto()
	PUBLIC = auto()
	RESTRICTED = auto()


@dataclass
class Visibility:
	kind: VisibilityKind = VisibilityKind.INHERITED
	tokens: TokenStream = field(default_factory=TokenStream)

	@property
	def is_inherited(self) -> bool:
		return self.kind is VisibilityKind.INHERITED

	def __str__(self) -> str:
		return str(self.tokens)


@dataclass
class TypeExpr:
	"""A type exactly as written (`&qobject::T`, `Pin<&mut T>`)."""

	tokens: TokenStream
	span: Span = field(default_factory=Span)

	def __str__(self) -> str:
		return str(self.tokens)


# --- patterns -----------------------------------------------------------


class Pat:
	span: Span


@dataclass
class PatIdent(Pat):
	ident: Ident
	attrs: List[Attribute] = field(default_factory=list)
	by_ref: Optional[Ident] = None
	mutability: Optional[Ident] = None
	subpat: Optional[Pat] = None
	span: Span = field(default_factory=Span)


@dataclass
class PatReference(Pat):
	and_token: Punct
	pat: Pat
	mutability: Optional[Ident] = None
	span: Span = field(default_factory=Span)


@dataclass
class PatTuple(Pat):
	elems: List[Pat]
	span: Span = field(default_factory=Span)


@dataclass
class PatWild(Pat):
	span: Span = field(default_factory=Span)


@dataclass
class PatLit(Pat):
	lit: Literal
	span: Span = field(default_factory=Span)


# --- function arguments and signatures ----------------------------------


class FnArg:
	attrs: List[Attribute]
	span: Span


@dataclass
class Receiver(FnArg):
	"""Shorthand receiver: `self`, `mut self`, `&self`, `&'a mut self`."""

	self_token: Ident
	attrs: List[Attribute] = field(default_factory=list)
	reference: Optional[Punct] = None
	lifetime: Optional[Ident] = None
	mutability: Optional[Ident] = None
	span: Span = field(default_factory=Span)


@dataclass
class PatType(FnArg):
	"""Typed argument: `pat: Type`."""

	pat: Pat
	ty: TypeExpr
	attrs: List[Attribute] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass
class Signature:
	fn_token: Ident
	ident: Ident
	inputs: List[FnArg] = field(default_factory=list)
	output: Optional[TypeExpr] = None
	unsafety: Optional[Ident] = None
	generics: TokenStream = field(default_factory=TokenStream)
	where_clause: TokenStream = field(default_factory=TokenStream)
	span: Span = field(default_factory=Span)


# --- foreign items ------------------------------------------------------


class ForeignItemKind(Enum):
	TYPE = auto()
	FN = auto()
	STATIC = auto()
	MACRO = auto()
	VERBATIM = auto()


class ForeignItem:
	kind: ClassVar[ForeignItemKind]
	span: Span


@dataclass
class ForeignItemType(ForeignItem):
	"""`type Name;` with no trailing target type, bounds or generics."""

	kind: ClassVar[ForeignItemKind] = ForeignItemKind.TYPE

	attrs: List[Attribute]
	vis: Visibility
	type_token: Ident
	ident: Ident
	span: Span = field(default_factory=Span)

	def to_tokens(self) -> TokenStream:
		semi = Punct(";", False, self.ident.span.end())
		parts = [attr.tokens for attr in self.attrs]
		parts.append(self.vis.tokens)
		parts.append(TokenStream([self.type_token, self.ident, semi]))
		return TokenStream.concat(parts)


@dataclass
class ForeignItemFn(ForeignItem):
	kind: ClassVar[ForeignItemKind] = ForeignItemKind.FN

	attrs: List[Attribute]
	vis: Visibility
	sig: Signature
	span: Span = field(default_factory=Span)


@dataclass
class ForeignItemStatic(ForeignItem):
	kind: ClassVar[ForeignItemKind] = ForeignItemKind.STATIC

	attrs: List[Attribute]
	vis: Visibility
	ident: Ident
	ty: TypeExpr
	mutability: Optional[Ident] = None
	span: Span = field(default_factory=Span)


@dataclass
class ForeignItemMacro(ForeignItem):
	"""`path!(...)` / `path![...];` / `path!{...}` inside a block."""

	kind: ClassVar[ForeignItemKind] = ForeignItemKind.MACRO

	attrs: List[Attribute]
	path: str
	body: Group
	span: Span = field(default_factory=Span)


@dataclass
class ForeignItemVerbatim(ForeignItem):
	"""An item the declaration parser could not type, kept as raw tokens."""

	kind: ClassVar[ForeignItemKind] = ForeignItemKind.VERBATIM

	tokens: TokenStream
	span: Span = field(default_factory=Span)


AnyForeignItem = Union[ForeignItemType, ForeignItemFn, ForeignItemStatic, ForeignItemMacro, ForeignItemVerbatim]


@dataclass
class ItemForeignMod:
	"""`[unsafe] extern "ABI" { items }` with its attributes in source order."""

	attrs: List[Attribute]
	extern_token: Ident
	brace: Group
	items: List[AnyForeignItem] = field(default_factory=list)
	abi: Optional[Literal] = None
	unsafety: Optional[Ident] = None
	span: Span = field(default_factory=Span)

	@property
	def abi_name(self) -> Optional[str]:
		if self.abi is None:
			return None
		return self.abi.text.strip('"')


__all__ = [
	"AnyForeignItem",
	"Attribute",
	"FnArg",
	"ForeignItem",
	"ForeignItemFn",
	"ForeignItemKind",
	"ForeignItemMacro",
	"ForeignItemStatic",
	"ForeignItemType",
	"ForeignItemVerbatim",
	"ItemForeignMod",
	"Pat",
	"PatIdent",
	"PatLit",
	"PatReference",
	"PatTuple",
	"PatType",
	"PatWild",
	"Receiver",
	"Signature",
	"TypeExpr",
	"Visibility",
	"VisibilityKind",
]
