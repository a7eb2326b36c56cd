# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: parse → resolve → handler pass → validate → outputs.

Exit codes: 0 success, 1 user errors (diagnostics), 2 internal errors.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from lambdagen.config import DEFAULT_CONTRACT
from lambdagen.core.diagnostics import Diagnostic, DiagnosticLog
from lambdagen.core.module_id import ModuleId
from lambdagen.core.types_core import TypeTable
from lambdagen.handlers import HandlerPassError, run_handler_pass
from lambdagen.parser import parse_file
from lambdagen.printer import render_function, render_unit
from lambdagen.resolver import resolve_program
from lambdagen.runtime_modules import default_registry
from lambdagen.trace import emit_trace
from lambdagen.tree_validate import validate_unit


def _diag_to_json(diag: Diagnostic, phase: str, source: Path) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	file = diag.span.file if diag.span.file is not None else str(source)
	return {
		"phase": diag.phase or phase,
		"message": diag.message,
		"severity": diag.severity,
		"file": file,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _report(
	args: argparse.Namespace,
	exit_code: int,
	diags: List[Diagnostic],
	*,
	handlers: List[str] | None = None,
	entry_point: str | None = None,
	unit_text: str | None = None,
) -> int:
	if args.json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [_diag_to_json(d, "handlers", args.source) for d in diags],
			"handlers": handlers or [],
			"entry_point": entry_point,
		}
		print(json.dumps(payload))
		return exit_code
	for diag in diags:
		span = diag.span.in_file(str(args.source))
		print(Diagnostic(
			message=diag.message,
			code=diag.code,
			phase=diag.phase,
			severity=diag.severity,
			span=span,
			notes=diag.notes,
		).format_human(), file=sys.stderr)
	if unit_text is not None:
		print(unit_text, end="")
	elif entry_point is not None and args.print_entry:
		print(entry_point)
	return exit_code


def _internal_error(args: argparse.Namespace, err: BaseException) -> int:
	msg = f"internal error: {err}"
	if args.json:
		print(json.dumps({"exit_code": 2, "diagnostics": [{"phase": "handlers", "message": msg, "severity": "error", "file": str(args.source), "line": None, "column": None, "notes": []}]}))
	else:
		print(f"{args.source}:?:?: error: {msg}", file=sys.stderr)
	return 2


def _module_id_arg(text: str) -> ModuleId:
	try:
		return ModuleId.parse(text)
	except ValueError as err:
		raise argparse.ArgumentTypeError(str(err)) from err


def main(argv: list[str] | None = None) -> int:
	"""
	Parse one source file, resolve it, run the handler pass and validate the
	result. With --json, prints a single JSON object (exit_code, diagnostics,
	handlers, entry_point); otherwise diagnostics go to stderr.
	"""
	parser = argparse.ArgumentParser(description="lambda handler entry-point generator")
	parser.add_argument("source", type=Path, help="Path to the source file")
	parser.add_argument(
		"--module",
		dest="module_id",
		type=_module_id_arg,
		help="Module id of the source as namespace/name (default: local/<file stem>)",
	)
	parser.add_argument(
		"--entry-name",
		default=DEFAULT_CONTRACT.entry_point_name,
		help="Name of the synthesized entry-point function",
	)
	parser.add_argument("-o", "--output", type=Path, help="Path of the compiled output; the build trace is written next to it")
	parser.add_argument("--print-entry", action="store_true", help="Print the synthesized entry point")
	parser.add_argument("--print-unit", action="store_true", help="Print the whole unit after the handler pass")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	args = parser.parse_args(argv)

	contract = DEFAULT_CONTRACT.with_entry_point(args.entry_name)
	source_path: Path = args.source
	if not source_path.exists():
		msg = f"source file not found: {source_path}"
		return _report(args, 1, [Diagnostic(message=msg, phase="parser", severity="error")])

	prog, parse_diags = parse_file(source_path)
	if prog is None:
		return _report(args, 1, parse_diags)

	module_id = args.module_id or ModuleId("local", source_path.stem)
	types = TypeTable()
	registry = default_registry(types, contract)
	resolved = resolve_program(prog, module_id=module_id, registry=registry, types=types, path=str(source_path))
	if any(d.is_error for d in resolved.diagnostics):
		return _report(args, 1, resolved.diagnostics)

	unit = resolved.unit
	log = DiagnosticLog(phase="handlers")
	try:
		result = run_handler_pass(unit, contract=contract, types=types, log=log)
		validate_unit(unit)
	except (HandlerPassError, AssertionError) as err:
		return _internal_error(args, err)

	if args.output is not None and result.entry_point is not None and not log.has_errors():
		trace_log = DiagnosticLog(phase="trace")
		emit_trace(args.output, result.handlers, trace_log, contract)
		# Trace failures are reported but never fail the build.
		log.extend(trace_log.diagnostics)

	exit_code = 1 if any(d.is_error and d.phase != "trace" for d in log) else 0
	entry_text = render_function(result.entry_point, unit) if result.entry_point is not None else None
	return _report(
		args,
		exit_code,
		log.diagnostics,
		handlers=[h.name for h in result.handlers],
		entry_point=entry_text,
		unit_text=render_unit(unit) if args.print_unit else None,
	)


if __name__ == "__main__":
	sys.exit(main())
