# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
User-facing extraction errors.

These are `ValueError` subclasses so callers can treat them as plain
parse-time failures, but each carries the span it is anchored on so the driver
can turn it into a pinned Diagnostic instead of crashing.
"""

from __future__ import annotations

from bridgegen.core.diagnostics import Diagnostic
from bridgegen.core.span import Span


class BridgeSyntaxError(ValueError):
	code = "E-SYNTAX"
	phase = "parser"

	def __init__(self, message: str, *, span: Span | None = None) -> None:
		super().__init__(message)
		self.message = message
		self.span = span if span is not None else Span()

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase=self.phase,
			severity="error",
			span=self.span,
		)


class StructuralParseError(BridgeSyntaxError):
	"""
	Malformed token grammar: a missing terminator, an unexpected token left
	after a full parse, or a broken foreign block body.
	"""

	code = "E-PARSE"


class ReceiverValidationError(BridgeSyntaxError):
	"""The first argument of a signature is not a plain `self: Type` binding."""

	code = "E-RECEIVER"
	phase = "receiver"


__all__ = ["BridgeSyntaxError", "ReceiverValidationError", "StructuralParseError"]
