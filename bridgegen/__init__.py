# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
bridgegen: syntax extraction for bridge declaration blocks.

Packages:
  - core: spans and diagnostics shared by every pass
  - syntax: token trees, the parse cursor, and foreign-block extraction
"""

__all__ = [
	"core",
	"syntax",
]
