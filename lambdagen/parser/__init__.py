# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser entry points.

`parse_source` never raises for malformed input: syntax errors and builder
errors come back as parser-phase diagnostics so the driver can report them
with the rest of the pipeline's output.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedInput

from lambdagen.core.diagnostics import Diagnostic
from lambdagen.core.span import Span

from . import parser as _parser
from .ast import Located, Program


def _span_in_file(path: str | None, loc: Located | None) -> Span:
	if loc is None:
		return Span(file=path)
	return Span(file=path, line=loc.line, column=loc.column, raw=loc)


def parse_source(source: str, *, path: str | None = None) -> Tuple[Optional[Program], List[Diagnostic]]:
	"""Parse `source` into a Program; on failure return (None, [diagnostic])."""
	try:
		return _parser.parse_program(source), []
	except (_parser.ParamOrderError, _parser.StringEscapeError) as err:
		return None, [Diagnostic(message=str(err), phase="parser", severity="error", span=_span_in_file(path, err.loc))]
	except UnexpectedInput as err:
		span = Span(
			file=path,
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
			raw=err,
		)
		return None, [Diagnostic(message=str(err).strip(), phase="parser", severity="error", span=span)]


def parse_file(path: Path) -> Tuple[Optional[Program], List[Diagnostic]]:
	return parse_source(path.read_text(encoding="utf-8"), path=str(path))


__all__ = ["parse_source", "parse_file"]
