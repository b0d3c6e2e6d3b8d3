"""
Common diagnostic structure handed from the extraction core to its driver.

The core never prints or logs; a failed extraction becomes one Diagnostic
(message plus span) that the invoking tool renders however it likes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents an extraction diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Which extraction step produced the diagnostic (`parser`, `receiver`).
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)


def diagnostic_to_json(diag: Diagnostic, *, phase: str | None = None, file: str | None = None) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase or phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"file": diag.span.file or file,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


__all__ = ["Diagnostic", "diagnostic_to_json"]
