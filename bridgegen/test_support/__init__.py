# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need syntax nodes.

These let test data be written as source snippets instead of hand-built
token trees.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from bridgegen.syntax.ast import ForeignItemFn, ItemForeignMod
from bridgegen.syntax.parser import parse_foreign_item, parse_item_foreign_mod
from bridgegen.syntax.stream import ParseStream, parse_str
from bridgegen.syntax.tokens import TokenStream, lex

T = TypeVar("T")


def tokens_to_syn(source: str, parser: Callable[[ParseStream], T]) -> T:
	"""Parse a whole source snippet with `parser`."""
	return parse_str(source, parser, file="test.rs")


def foreign_mod(source: str) -> ItemForeignMod:
	return tokens_to_syn(source, parse_item_foreign_mod)


def foreign_fn(source: str) -> ForeignItemFn:
	item = tokens_to_syn(source, parse_foreign_item)
	assert isinstance(item, ForeignItemFn), f"expected a foreign fn, got {type(item).__name__}"
	return item


def tokens(source: str) -> TokenStream:
	return lex(source, file="test.rs")
