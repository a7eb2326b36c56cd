# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.config import DEFAULT_CONTRACT
from lambdagen.handlers.collector import INVALID_HANDLER_CODE, collect_handlers
from lambdagen.handlers.validator import SignatureViolation
from lambdagen.test_helpers import UnitBuilder


def test_unmarked_functions_are_ignored_silently():
	b = UnitBuilder()
	b.plain("a")
	b.function("b", [("x", b.string)], b.string)
	result = collect_handlers(b.unit)
	assert result.handlers == []
	assert result.diagnostics == []


def test_valid_handlers_kept_in_source_order():
	b = UnitBuilder()
	h2 = b.handler("zeta")
	b.plain("middle")
	h1 = b.handler("alpha")
	result = collect_handlers(b.unit)
	assert result.handlers == [h2, h1]
	assert result.diagnostics == []


def test_invalid_marked_function_gets_one_diagnostic_at_its_position():
	b = UnitBuilder()
	bad = b.handler("bad", params=[("ctx", b.context)])
	result = collect_handlers(b.unit)
	assert result.handlers == []
	assert len(result.diagnostics) == 1
	diag = result.diagnostics[0]
	assert diag.severity == "error"
	assert diag.phase == "handlers"
	assert diag.code == INVALID_HANDLER_CODE
	assert diag.span == bad.span
	assert diag.message == DEFAULT_CONTRACT.invalid_signature_message("bad")
	assert "bad" in diag.message
	assert "public function (awslambda:Context, json) returns json|error" in diag.message
	assert diag.notes == [SignatureViolation.PARAM_SHAPE.value]


def test_invalid_handler_does_not_stop_collection():
	b = UnitBuilder()
	h1 = b.handler("h1")
	b.plain("h2")
	h3 = b.handler("h3", params=[("ctx", b.context), ("input", b.string)])
	h4 = b.handler("h4")
	result = collect_handlers(b.unit)
	assert [h.name for h in result.handlers] == ["h1", "h4"]
	assert result.handlers == [h1, h4]
	assert [d.span for d in result.diagnostics] == [h3.span]
	assert result.diagnostics[0].notes == [SignatureViolation.PAYLOAD_PARAM.value]


def test_each_invalid_handler_reported_once():
	b = UnitBuilder()
	b.handler("a", ret=b.json)
	b.handler("b", rest=("more", b.json))
	b.handler("c", ret=b.union(b.json, b.string))
	result = collect_handlers(b.unit)
	assert result.handlers == []
	assert len(result.diagnostics) == 3
	assert [d.notes[0] for d in result.diagnostics] == [
		SignatureViolation.RETURN_NOT_UNION.value,
		SignatureViolation.PARAM_SHAPE.value,
		SignatureViolation.RETURN_MEMBERS.value,
	]


def test_collect_is_repeatable_and_does_not_mutate_unit():
	b = UnitBuilder()
	b.handler("h1")
	b.handler("bad", ret=b.json)
	before = list(b.unit.functions)
	first = collect_handlers(b.unit)
	second = collect_handlers(b.unit)
	assert first.handlers == second.handlers
	assert [(d.message, d.span, d.notes) for d in first.diagnostics] == [
		(d.message, d.span, d.notes) for d in second.diagnostics
	]
	assert b.unit.functions == before
	assert len(b.unit.scope) == 2
