# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.config import HandlerContract
from lambdagen.handlers.scanner import has_handler_marker
from lambdagen.test_helpers import UnitBuilder


def test_marker_present_among_others():
	b = UnitBuilder()
	fn = b.handler("h", markers=[b.marker("ballerina", "http", "Resource"), b.handler_marker()])
	assert has_handler_marker(fn)


def test_no_markers_means_not_a_candidate():
	b = UnitBuilder()
	assert not has_handler_marker(b.plain("h"))


def test_marker_identity_is_namespace_module_and_tag():
	b = UnitBuilder()
	# Same tag, wrong namespace / module.
	assert not has_handler_marker(b.handler("a", markers=[b.marker("acme", "awslambda", "Function")]))
	assert not has_handler_marker(b.handler("b", markers=[b.marker("ballerinax", "gcf", "Function")]))
	# Right module, wrong tag.
	assert not has_handler_marker(b.handler("c", markers=[b.marker("ballerinax", "awslambda", "Context")]))


def test_marker_identity_follows_contract():
	contract = HandlerContract(marker_name="Handler")
	b = UnitBuilder(contract=contract)
	fn = b.handler("h")
	assert has_handler_marker(fn, contract)
	assert not has_handler_marker(fn)
