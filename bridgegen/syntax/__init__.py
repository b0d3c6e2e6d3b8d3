# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Syntax layer: token trees, the parse cursor, the foreign-block declaration
parser, and the extraction helpers built on top of them.
"""

from __future__ import annotations

from .ast import (
	Attribute,
	FnArg,
	ForeignItemFn,
	ForeignItemKind,
	ForeignItemMacro,
	ForeignItemStatic,
	ForeignItemType,
	ForeignItemVerbatim,
	ItemForeignMod,
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
from .errors import BridgeSyntaxError, ReceiverValidationError, StructuralParseError
from .foreignmod import (
	ForeignFnSelf,
	foreign_mod_to_foreign_item_types,
	self_type_from_foreign_fn,
	verbatim_to_foreign_mod,
	verbatim_to_foreign_type,
)
from .parser import parse_foreign_item, parse_item_foreign_mod, parse_signature
from .stream import ParseStream, parse_all, parse_str
from .tokens import Delimiter, Group, Ident, Literal, Punct, TokenStream, lex

__all__ = [
	"Attribute",
	"BridgeSyntaxError",
	"Delimiter",
	"FnArg",
	"ForeignFnSelf",
	"ForeignItemFn",
	"ForeignItemKind",
	"ForeignItemMacro",
	"ForeignItemStatic",
	"ForeignItemType",
	"ForeignItemVerbatim",
	"Group",
	"Ident",
	"ItemForeignMod",
	"Literal",
	"ParseStream",
	"PatIdent",
	"PatLit",
	"PatReference",
	"PatTuple",
	"PatType",
	"PatWild",
	"Punct",
	"Receiver",
	"ReceiverValidationError",
	"Signature",
	"StructuralParseError",
	"TokenStream",
	"TypeExpr",
	"Visibility",
	"VisibilityKind",
	"foreign_mod_to_foreign_item_types",
	"lex",
	"parse_all",
	"parse_foreign_item",
	"parse_item_foreign_mod",
	"parse_signature",
	"parse_str",
	"self_type_from_foreign_fn",
	"verbatim_to_foreign_mod",
	"verbatim_to_foreign_type",
]
