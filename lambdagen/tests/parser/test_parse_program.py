# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.parser import parse_source
from lambdagen.parser import ast as A
from lambdagen.parser.parser import parse_program


def test_parse_imports_records_and_functions():
	prog = parse_program(
		"""
import ballerinax/awslambda;
import ballerina/io as console;

type Payload record {}

@awslambda:Function
public function echo(awslambda:Context ctx, json input) returns json|error {
    return input;
}
"""
	)
	assert [(i.org, i.module, i.alias) for i in prog.imports] == [
		("ballerinax", "awslambda", None),
		("ballerina", "io", "console"),
	]
	assert [r.name for r in prog.records] == ["Payload"]
	fn = prog.functions[0]
	assert fn.name == "echo"
	assert fn.public is True
	assert [(a.module_alias, a.tag) for a in fn.annotations] == [("awslambda", "Function")]
	assert [p.name for p in fn.params] == ["ctx", "input"]
	ctx_ty = fn.params[0].type_expr
	assert isinstance(ctx_ty, A.TypeExpr)
	assert (ctx_ty.module_alias, ctx_ty.name) == ("awslambda", "Context")
	assert isinstance(fn.return_type, A.UnionTypeExpr)
	assert [m.name for m in fn.return_type.members] == ["json", "error"]
	assert isinstance(fn.body.statements[0], A.ReturnStmt)
	assert fn.loc.line == 8


def test_parse_param_kinds():
	prog = parse_program('function f(json a, string b = "x", int... rest) { }')
	kinds = [(p.name, p.kind) for p in prog.functions[0].params]
	assert kinds == [("a", A.PARAM_REQUIRED), ("b", A.PARAM_DEFAULTABLE), ("rest", A.PARAM_REST)]
	default = prog.functions[0].params[1].default
	assert isinstance(default, A.Literal) and default.value == "x"


def test_parse_function_without_params_or_return():
	prog = parse_program("function noop() { return; }")
	fn = prog.functions[0]
	assert fn.params == []
	assert fn.return_type is None
	assert fn.public is False
	stmt = fn.body.statements[0]
	assert isinstance(stmt, A.ReturnStmt) and stmt.value is None


def test_parse_nil_type_and_literals():
	prog = parse_program(
		"""
function f() returns () {
    g("a\\n", 42, true, false, ());
    x:y();
}
"""
	)
	fn = prog.functions[0]
	assert isinstance(fn.return_type, A.TypeExpr) and fn.return_type.name == "()"
	call = fn.body.statements[0].expr
	assert isinstance(call, A.Call)
	assert call.func.ident == "g"
	assert [a.value for a in call.args] == ["a\n", 42, True, False, None]
	qualified = fn.body.statements[1].expr
	assert (qualified.func.module_alias, qualified.func.ident) == ("x", "y")
	assert qualified.args == []


def test_local_annotation_and_comments():
	prog = parse_program(
		"""
// leading comment
@Handler
function f() { } // trailing
"""
	)
	ann = prog.functions[0].annotations[0]
	assert ann.module_alias is None and ann.tag == "Handler"


def test_parse_source_reports_syntax_errors():
	prog, diags = parse_source("function f( { }", path="bad.bal")
	assert prog is None
	assert len(diags) == 1
	assert diags[0].phase == "parser"
	assert diags[0].severity == "error"
	assert diags[0].span.file == "bad.bal"
	assert diags[0].span.line == 1


def test_parse_source_reports_param_order():
	prog, diags = parse_source("function f(json... a, json b) { }", path="bad.bal")
	assert prog is None
	assert "must be the last parameter" in diags[0].message
	prog, diags = parse_source('function f(json a = (), json b) { }', path="bad.bal")
	assert prog is None
	assert "cannot follow a defaultable parameter" in diags[0].message


def test_unicode_and_hex_escapes_keep_code_points():
	prog = parse_program('function f() { g("caf\\u00e9", "\\x41\\t", "naïve \\"q\\""); }')
	call = prog.functions[0].body.statements[0].expr
	assert [a.value for a in call.args] == ["café", "A\t", 'naïve "q"']


def test_parse_source_reports_bad_escape():
	prog, diags = parse_source('function f() { g("x\\x"); }', path="bad.bal")
	assert prog is None
	(diag,) = diags
	assert diag.phase == "parser"
	assert diag.message == "invalid escape sequence '\\x' in string literal"
	assert (diag.span.file, diag.span.line, diag.span.column) == ("bad.bal", 1, 18)
