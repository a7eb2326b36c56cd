# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.diagnostics import Diagnostic, DiagnosticLog
from lambdagen.core.tree import CompilationUnit, FunctionDecl
from lambdagen.handlers.scanner import has_handler_marker
from lambdagen.handlers.validator import check_handler_signature

INVALID_HANDLER_CODE = "E-HANDLER-SIG"


@dataclass
class CollectResult:
	handlers: list[FunctionDecl] = field(default_factory=list)
	diagnostics: list[Diagnostic] = field(default_factory=list)


def collect_handlers(unit: CompilationUnit, contract: HandlerContract = DEFAULT_CONTRACT) -> CollectResult:
	"""
	Find the valid handlers of `unit` in declaration order.

	Functions without the handler marker are ignored. Marked functions with a
	bad signature get one error diagnostic each and are left out; they never
	stop the walk. The unit is not modified.
	"""
	log = DiagnosticLog(phase="handlers")
	handlers: list[FunctionDecl] = []
	for decl in unit.functions:
		if not has_handler_marker(decl, contract):
			continue
		violation = check_handler_signature(decl, contract)
		if violation is None:
			handlers.append(decl)
			continue
		log.error(
			decl.span,
			contract.invalid_signature_message(decl.name),
			code=INVALID_HANDLER_CODE,
			notes=[violation.value],
		)
	return CollectResult(handlers=handlers, diagnostics=log.diagnostics)


__all__ = ["CollectResult", "collect_handlers", "INVALID_HANDLER_CODE"]
