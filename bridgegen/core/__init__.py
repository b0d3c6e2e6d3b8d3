"""
bridgegen.core: shared source spans and diagnostics.

Modules:
  - span: best-effort source location carried by tokens and errors
  - diagnostics: structured diagnostic records handed to the driver
"""

__all__ = [
	"diagnostics",
	"span",
]
