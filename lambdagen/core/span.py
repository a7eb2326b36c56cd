# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics and tree nodes.

A Span carries optional file/line/column info; `raw` keeps whatever
parser-specific location object produced it so richer renderers can still
recover it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any) -> "Span":
		"""
		Construct a Span from an existing parser/location object.

		If `loc` is already a Span, it is returned unchanged; otherwise common
		location attributes are copied and the object itself is kept in `raw`.
		"""
		if loc is None:
			return cls()
		if isinstance(loc, cls):
			return loc
		return cls(
			file=getattr(loc, "file", None) or getattr(loc, "filename", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def in_file(self, file: str | None) -> "Span":
		"""Return a copy attributed to `file` (unless one is already set)."""
		if self.file is not None or file is None:
			return self
		return replace(self, file=file)

	def is_known(self) -> bool:
		return self.line is not None

	def render(self) -> str:
		"""`file:line:col` with `?` for unknown parts."""
		line = "?" if self.line is None else str(self.line)
		column = "?" if self.column is None else str(self.column)
		return f"{self.file or '<unknown>'}:{line}:{column}"


__all__ = ["Span"]
