# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Cursor over one level of a TokenStream.

A ParseStream only ever sees the token trees of a single nesting level: a
Group is one step, and parsing inside it goes through a child stream from
`parse_group`. This is what lets callers scan for a `;` or `,` without ever
mistaking punctuation nested in `(...)`, `[...]` or `{...}` for their own.
"""

from __future__ import annotations

from typing import Callable, List, Optional, TypeVar

from bridgegen.core.span import Span

from .errors import StructuralParseError
from .tokens import Delimiter, Group, Ident, Literal, Punct, TokenStream, TokenTree, lex

T = TypeVar("T")

# Reserved words that can never be used as a plain identifier.
KEYWORDS = frozenset(
	{
		"as", "async", "await", "break", "const", "continue", "crate", "dyn",
		"else", "enum", "extern", "false", "fn", "for", "if", "impl", "in",
		"let", "loop", "match", "mod", "move", "mut", "pub", "ref", "return",
		"self", "Self", "static", "struct", "super", "trait", "true", "type",
		"unsafe", "use", "where", "while",
	}
)


class ParseStream:
	def __init__(self, tokens: TokenStream, *, scope: Span | None = None) -> None:
		self._tokens = tokens
		self._pos = 0
		# Where "unexpected end of input" points when the stream runs dry.
		self._scope = scope if scope is not None else tokens.span.end()

	@property
	def position(self) -> int:
		return self._pos

	def fork(self) -> "ParseStream":
		ahead = ParseStream(self._tokens, scope=self._scope)
		ahead._pos = self._pos
		return ahead

	def is_empty(self) -> bool:
		return self._pos >= len(self._tokens)

	def peek(self, offset: int = 0) -> Optional[TokenTree]:
		idx = self._pos + offset
		if idx < len(self._tokens):
			return self._tokens[idx]
		return None

	def peek_ident(self, text: str | None = None, offset: int = 0) -> bool:
		tree = self.peek(offset)
		return isinstance(tree, Ident) and (text is None or tree.text == text)

	def peek_punct(self, chars: str, offset: int = 0) -> bool:
		"""
		True if the next trees spell `chars`; multi-character operators must be
		joint (`::` matches, `: :` does not).
		"""
		for i, ch in enumerate(chars):
			tree = self.peek(offset + i)
			if not isinstance(tree, Punct) or tree.char != ch:
				return False
			if i + 1 < len(chars) and not tree.joint:
				return False
		return True

	def peek_group(self, delimiter: Delimiter, offset: int = 0) -> bool:
		tree = self.peek(offset)
		return isinstance(tree, Group) and tree.delimiter is delimiter

	def peek_literal(self, offset: int = 0) -> bool:
		return isinstance(self.peek(offset), Literal)

	def span(self) -> Span:
		"""Span of the next token tree, or the end-of-input anchor."""
		tree = self.peek()
		if tree is None:
			return self._scope
		return tree.span

	def error(self, message: str, *, span: Span | None = None) -> StructuralParseError:
		if span is None and self.is_empty():
			message = f"unexpected end of input, {message}"
		return StructuralParseError(message, span=span if span is not None else self.span())

	def advance(self) -> TokenTree:
		tree = self.peek()
		if tree is None:
			raise self.error("expected a token")
		self._pos += 1
		return tree

	def step_to_end(self) -> None:
		"""Move the cursor past every remaining token tree."""
		while self.peek() is not None:
			self._pos += 1

	def tokens_since(self, start: int) -> TokenStream:
		return self._tokens[start:self._pos]

	def rest(self) -> TokenStream:
		return self._tokens[self._pos:]

	def parse_ident(self) -> Ident:
		tree = self.peek()
		if not isinstance(tree, Ident):
			raise self.error("expected identifier")
		if tree.text in KEYWORDS:
			raise self.error(f"expected identifier, found keyword `{tree.text}`")
		self._pos += 1
		return tree

	def expect_keyword(self, keyword: str) -> Ident:
		if not self.peek_ident(keyword):
			raise self.error(f"expected `{keyword}`")
		return self.advance()  # type: ignore[return-value]

	def expect_punct(self, chars: str) -> List[Punct]:
		if not self.peek_punct(chars):
			raise self.error(f"expected `{chars}`")
		return [self.advance() for _ in chars]  # type: ignore[misc]

	def parse_literal(self) -> Literal:
		tree = self.peek()
		if not isinstance(tree, Literal):
			raise self.error("expected literal")
		self._pos += 1
		return tree

	def parse_group(self, delimiter: Delimiter) -> tuple[Group, "ParseStream"]:
		"""Consume a delimited group and return it with a stream over its contents."""
		tree = self.peek()
		if not isinstance(tree, Group) or tree.delimiter is not delimiter:
			raise self.error(f"expected `{delimiter.open}`")
		self._pos += 1
		return tree, ParseStream(tree.stream, scope=tree.span.end())


def parse_all(tokens: TokenStream, parser: Callable[[ParseStream], T], *, scope: Span | None = None) -> T:
	"""
	Run `parser` over `tokens` and require that every token is consumed.

	Leftover input is a StructuralParseError anchored on the first unconsumed
	token.
	"""
	stream = ParseStream(tokens, scope=scope)
	result = parser(stream)
	if not stream.is_empty():
		raise stream.error("unexpected token")
	return result


def parse_str(source: str, parser: Callable[[ParseStream], T], *, file: str | None = None) -> T:
	"""Lex `source` and run `parser` over the whole token stream."""
	return parse_all(lex(source, file=file), parser)


__all__ = ["KEYWORDS", "ParseStream", "parse_all", "parse_str"]
