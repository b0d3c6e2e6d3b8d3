# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by tokens and diagnostics.

A Span carries optional file/line/column info for the start and end of a
source range. Lines and columns are 1-based, `end_column` points one past the
last character (lark's convention).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a lexer token or tree meta.

		If `loc` is already a Span, it is returned unchanged.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		return cls(
			file=file or getattr(loc, "file", None) or getattr(loc, "filename", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
		)

	@property
	def is_known(self) -> bool:
		return self.line is not None

	def join(self, other: "Span") -> "Span":
		"""
		Return the span covering `self` through `other`.

		Unknown spans are absorbed: joining with Span() yields the other side.
		"""
		if not other.is_known:
			return self
		if not self.is_known:
			return other
		return Span(
			file=self.file or other.file,
			line=self.line,
			column=self.column,
			end_line=other.end_line,
			end_column=other.end_column,
		)

	@classmethod
	def covering(cls, spans: Iterable["Span"]) -> "Span":
		"""Span from the first known span to the last one (Span() when none)."""
		result = cls()
		for span in spans:
			result = result.join(span)
		return result

	def end(self) -> "Span":
		"""Zero-width span just past the end of this span."""
		if not self.is_known:
			return self
		return Span(
			file=self.file,
			line=self.end_line,
			column=self.end_column,
			end_line=self.end_line,
			end_column=self.end_column,
		)

	def __str__(self) -> str:
		if not self.is_known:
			return self.file or "<unknown>"
		prefix = f"{self.file}:" if self.file else ""
		return f"{prefix}{self.line}:{self.column}"


__all__ = ["Span"]
