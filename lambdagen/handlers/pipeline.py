# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.diagnostics import Diagnostic, DiagnosticLog
from lambdagen.core.tree import CompilationUnit, FunctionDecl
from lambdagen.core.types_core import TypeTable
from lambdagen.handlers.collector import collect_handlers
from lambdagen.handlers.synthesizer import RuntimeSupport, synthesize_entry_point


@dataclass
class HandlerPassResult:
	handlers: list[FunctionDecl] = field(default_factory=list)
	diagnostics: list[Diagnostic] = field(default_factory=list)
	entry_point: FunctionDecl | None = None


def run_handler_pass(
	unit: CompilationUnit,
	*,
	contract: HandlerContract = DEFAULT_CONTRACT,
	runtime: RuntimeSupport | None = None,
	types: TypeTable | None = None,
	log: DiagnosticLog | None = None,
) -> HandlerPassResult:
	"""
	Collect handlers and synthesize the entry point for one unit.

	Invalid handlers only produce diagnostics; the remaining valid ones are
	still registered. Internal errors (HandlerPassError) propagate and leave
	the unit unmodified. When `log` is given the collector's diagnostics are
	also forwarded to it.
	"""
	collected = collect_handlers(unit, contract)
	if log is not None:
		log.extend(collected.diagnostics)
	entry = synthesize_entry_point(unit, collected.handlers, runtime=runtime, contract=contract, types=types)
	return HandlerPassResult(handlers=collected.handlers, diagnostics=collected.diagnostics, entry_point=entry)


__all__ = ["HandlerPassResult", "run_handler_pass"]
