# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.parser.parser import parse_program
from lambdagen.printer import render_function, render_unit
from lambdagen.test_helpers import compile_source

SOURCE = """
import ballerinax/awslambda as aws;

type Payload record {}

@aws:Function
public function echo(aws:Context ctx, json input) returns json|error {
    return input;
}

function f(Payload p, string s = "a\\"b", int... rest) {
    f(p, "x", 1, 2);
    aws:process();
    return;
}
"""


def test_render_function_uses_unit_prefixes():
	unit, diags = compile_source(SOURCE)
	assert diags == []
	text = render_function(unit.find_function("echo"), unit)
	assert text == "\n".join(
		[
			"@aws:Function",
			"public function echo(aws:Context ctx, json input) returns json|error {",
			"    return input;",
			"}",
		]
	)
	assert render_function(unit.find_function("f"), unit).splitlines()[0] == (
		'function f(Payload p, string s = "a\\"b", int... rest) {'
	)


def test_render_unit_reparses():
	unit, diags = compile_source(SOURCE)
	assert diags == []
	text = render_unit(unit)
	prog = parse_program(text)
	assert [fn.name for fn in prog.functions] == ["echo", "f"]
	assert [(i.org, i.module, i.alias) for i in prog.imports] == [("ballerinax", "awslambda", "aws")]
	assert [r.name for r in prog.records] == ["Payload"]
