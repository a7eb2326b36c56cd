# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build-trace side file written next to the compiled output.

For an output `build/app.balx` the trace lives at `build/app.txt` (suffix from
the handler contract). Existing files are appended to, so repeated builds
into the same directory accumulate one block per build.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.diagnostics import DiagnosticLog
from lambdagen.core.span import Span
from lambdagen.core.tree import FunctionDecl


def trace_path_for(binary_path: Path, contract: HandlerContract = DEFAULT_CONTRACT) -> Path:
	return binary_path.absolute().with_suffix(contract.trace_suffix)


def trace_text(handlers: Sequence[FunctionDecl]) -> str:
	"""One handler name per line; callers append it, so the file accumulates builds."""
	return "".join(f"{h.name}\n" for h in handlers)


def write_trace_file(text: str, target: Path) -> None:
	"""Append `text` to `target`, creating missing parent directories."""
	if target.exists():
		with target.open("a", encoding="utf-8") as fh:
			fh.write(text)
		return
	target.parent.mkdir(parents=True, exist_ok=True)
	target.write_text(text, encoding="utf-8")


def emit_trace(
	binary_path: Path,
	handlers: Sequence[FunctionDecl],
	log: DiagnosticLog,
	contract: HandlerContract = DEFAULT_CONTRACT,
) -> Path | None:
	"""
	Write the trace for `handlers`; returns the path, or None after reporting
	an error diagnostic when the file cannot be written.
	"""
	target = trace_path_for(binary_path, contract)
	try:
		write_trace_file(trace_text(handlers), target)
	except OSError as err:
		log.error(Span(file=str(target)), f"cannot write trace file: {err}")
		return None
	return target


__all__ = ["trace_path_for", "trace_text", "write_trace_file", "emit_trace"]
