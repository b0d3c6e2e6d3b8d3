# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Token trees for bridge declaration blocks.

Source text is lexed by a small lark grammar (`grammar.lark`) into a tree of
delimiter groups; `lex` then rebuilds that tree as an immutable TokenStream of
Ident/Punct/Literal/Group values. Everything downstream works on TokenStreams
and never sees lark objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union, overload

from lark import Lark, Token, Tree

from bridgegen.core.span import Span

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class Delimiter(Enum):
	PAREN = ("(", ")")
	BRACKET = ("[", "]")
	BRACE = ("{", "}")

	@property
	def open(self) -> str:
		return self.value[0]

	@property
	def close(self) -> str:
		return self.value[1]


@dataclass(frozen=True)
class Ident:
	text: str
	span: Span = Span()

	def __str__(self) -> str:
		return self.text


@dataclass(frozen=True)
class Punct:
	"""
	A single punctuation character.

	`joint` is set when the next character in the source is also punctuation
	(`::`, `->`, the `'` of a lifetime), so multi-character operators can be
	matched and printed without a gap.
	"""

	char: str
	joint: bool = False
	span: Span = Span()

	def __str__(self) -> str:
		return self.char


@dataclass(frozen=True)
class Literal:
	"""String, byte, char or numeric literal, kept exactly as written."""

	text: str
	span: Span = Span()

	@property
	def is_string(self) -> bool:
		return self.text.startswith('"')

	def __str__(self) -> str:
		return self.text


@dataclass(frozen=True)
class Group:
	delimiter: Delimiter
	stream: "TokenStream"
	span: Span = Span()

	def __str__(self) -> str:
		inner = str(self.stream)
		if self.delimiter is Delimiter.BRACE and inner:
			return f"{{ {inner} }}"
		return f"{self.delimiter.open}{inner}{self.delimiter.close}"


TokenTree = Union[Ident, Punct, Literal, Group]


class TokenStream:
	"""Immutable ordered sequence of token trees."""

	__slots__ = ("_trees",)

	def __init__(self, trees: Iterable[TokenTree] = ()) -> None:
		self._trees: tuple[TokenTree, ...] = tuple(trees)

	def __iter__(self) -> Iterator[TokenTree]:
		return iter(self._trees)

	def __len__(self) -> int:
		return len(self._trees)

	def __bool__(self) -> bool:
		return bool(self._trees)

	@overload
	def __getitem__(self, index: int) -> TokenTree: ...

	@overload
	def __getitem__(self, index: slice) -> "TokenStream": ...

	def __getitem__(self, index):
		if isinstance(index, slice):
			return TokenStream(self._trees[index])
		return self._trees[index]

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, TokenStream):
			return NotImplemented
		return self._trees == other._trees

	def __hash__(self) -> int:
		return hash(self._trees)

	def __repr__(self) -> str:
		return f"TokenStream({str(self)!r})"

	def __str__(self) -> str:
		parts: List[str] = []
		glue = False
		for tree in self._trees:
			if parts and not glue:
				parts.append(" ")
			parts.append(str(tree))
			glue = isinstance(tree, Punct) and tree.joint
		return "".join(parts)

	@property
	def span(self) -> Span:
		return Span.covering(tree.span for tree in self._trees)

	@classmethod
	def concat(cls, streams: Sequence["TokenStream"]) -> "TokenStream":
		trees: List[TokenTree] = []
		for stream in streams:
			trees.extend(stream)
		return cls(trees)


_LEXER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)

_GROUP_DELIMITERS = {
	"paren": Delimiter.PAREN,
	"bracket": Delimiter.BRACKET,
	"brace": Delimiter.BRACE,
}


def lex(source: str, *, file: Optional[str] = None) -> TokenStream:
	"""
	Lex `source` into a TokenStream.

	Unbalanced delimiters and characters outside the token grammar raise lark's
	UnexpectedInput, like any other front-end lexing failure.
	"""
	tree = _LEXER.parse(source)
	return _build_stream(tree.children, file)


def _build_stream(children: Sequence[Union[Tree, Token]], file: Optional[str]) -> TokenStream:
	trees: List[TokenTree] = []
	for idx, child in enumerate(children):
		if isinstance(child, Tree):
			trees.append(_build_group(child, file))
			continue
		span = Span.from_loc(child, file=file)
		if child.type == "IDENT":
			trees.append(Ident(child.value, span))
		elif child.type == "PUNCT":
			nxt = children[idx + 1] if idx + 1 < len(children) else None
			trees.append(Punct(child.value, _is_joined(child, nxt), span))
		elif child.type == "LIFETIME":
			# `'a` is a joint quote followed by the lifetime name.
			quote_span = Span(file, child.line, child.column, child.line, child.column + 1)
			name_span = Span(file, child.line, child.column + 1, child.end_line, child.end_column)
			trees.append(Punct("'", True, quote_span))
			trees.append(Ident(child.value[1:], name_span))
		else:
			trees.append(Literal(child.value, span))
	return TokenStream(trees)


def _build_group(tree: Tree, file: Optional[str]) -> Group:
	open_tok, *inner, close_tok = tree.children
	span = Span.from_loc(open_tok, file=file).join(Span.from_loc(close_tok, file=file))
	return Group(_GROUP_DELIMITERS[tree.data], _build_stream(inner, file), span)


def _is_joined(tok: Token, nxt: Union[Tree, Token, None]) -> bool:
	if not isinstance(nxt, Token) or nxt.type not in ("PUNCT", "LIFETIME"):
		return False
	return nxt.start_pos == tok.end_pos


__all__ = [
	"Delimiter",
	"Group",
	"Ident",
	"Literal",
	"Punct",
	"TokenStream",
	"TokenTree",
	"lex",
]
