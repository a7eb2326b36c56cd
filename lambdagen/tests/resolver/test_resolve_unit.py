# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.config import RUNTIME_MODULE
from lambdagen.core.tree import Call, ExprStmt, ReturnStmt, VarRef
from lambdagen.core.types_core import TypeKind
from lambdagen.test_helpers import MAIN_MODULE, compile_source

HEADER = "import ballerinax/awslambda;\n"


def _messages(diags) -> list[str]:
	return [d.message for d in diags]


def test_resolves_handler_signature_types_and_markers():
	unit, diags = compile_source(
		HEADER
		+ """
@awslambda:Function
public function echo(awslambda:Context ctx, json input) returns json|error {
    return input;
}
"""
	)
	assert diags == []
	fn = unit.functions[0]
	ctx, payload = fn.required_params
	assert ctx.type.kind is TypeKind.USER_DEFINED
	assert ctx.type.origin == RUNTIME_MODULE
	assert ctx.type.name == "Context"
	assert payload.type.kind is TypeKind.JSON
	assert fn.return_type.kind is TypeKind.UNION
	assert [m.kind for m in fn.return_type.members] == [TypeKind.JSON, TypeKind.ERROR]
	assert [m.identity for m in fn.markers] == [("ballerinax", "awslambda", "Function")]
	assert unit.scope.lookup("echo") is fn.symbol
	ret = fn.body.statements[0]
	assert isinstance(ret, ReturnStmt) and isinstance(ret.value, VarRef)
	assert unit.span.line == 1
	assert unit.module_id == MAIN_MODULE


def test_imports_and_local_records():
	unit, diags = compile_source(
		"""
import ballerinax/awslambda as aws;
type Context record {}
function f(Context c) { }
"""
	)
	assert diags == []
	imp = unit.imports[0]
	assert imp.module_id == RUNTIME_MODULE
	assert imp.prefix == "aws"
	local_ctx = unit.functions[0].required_params[0].type
	assert local_ctx.kind is TypeKind.USER_DEFINED
	assert local_ctx.origin == MAIN_MODULE
	assert [t.name for t in unit.types] == ["Context"]


def test_param_kinds_and_function_symbol_arity():
	unit, diags = compile_source('function f(json a, string b = "x", int... rest) { }')
	assert diags == []
	fn = unit.functions[0]
	assert [p.name for p in fn.required_params] == ["a"]
	assert [p.name for p in fn.defaultable_params] == ["b"]
	assert fn.defaultable_params[0].default.value == "x"
	assert fn.rest_param.name == "rest"
	assert fn.symbol.arity() == (1, None)


def test_calls_resolve_to_symbols():
	unit, diags = compile_source(
		HEADER
		+ """
function helper(string s) { }
function main() {
    helper("x");
    awslambda:process();
}
"""
	)
	assert diags == []
	main = unit.find_function("main")
	helper_call, process_call = [s.expr for s in main.body.statements if isinstance(s, ExprStmt)]
	assert isinstance(helper_call, Call)
	assert helper_call.symbol is unit.scope.lookup("helper")
	assert helper_call.qualifier is None
	assert process_call.qualifier == "awslambda"
	assert process_call.symbol is unit.imports[0].symbol.scope.lookup("process")
	assert process_call.type.kind is TypeKind.NIL


def test_forward_references_between_functions():
	unit, diags = compile_source("function a() { b(); }\nfunction b() { }")
	assert diags == []
	assert unit.functions[0].body.statements[0].expr.symbol is unit.scope.lookup("b")


def test_unknown_module_type_and_annotation():
	unit, diags = compile_source(
		"""
import acme/nothing;
import ballerinax/awslambda;
@awslambda:Missing
function f(awslambda:Nope a, Unknown b, zz:T c) { }
@Local
function g() { }
"""
	)
	msgs = _messages(diags)
	assert "cannot resolve module 'acme/nothing'" in msgs
	assert "unknown annotation 'awslambda:Missing'" in msgs
	assert "unknown type 'awslambda:Nope'" in msgs
	assert "unknown type 'Unknown'" in msgs
	assert "undefined module prefix 'zz'" in msgs
	assert "unknown annotation 'Local'" in msgs
	assert unit.functions == []
	assert all(d.phase == "resolve" for d in diags)


def test_redeclarations_reported():
	unit, diags = compile_source("function f() { }\nfunction f() { }\ntype json record {}")
	msgs = _messages(diags)
	assert "redeclared symbol 'f'" in msgs
	assert "redeclared symbol 'json'" in msgs
	assert len(unit.functions) == 1


def test_duplicate_import_prefix():
	_, diags = compile_source("import ballerinax/awslambda;\nimport ballerinax/awslambda;")
	assert _messages(diags) == ["redeclared import prefix 'awslambda'"]


def test_call_arity_and_argument_types_checked():
	_, diags = compile_source(
		HEADER
		+ """
function f(awslambda:Context c) {
    awslambda:process(1);
    awslambda:register(1, f);
    nothing();
}
"""
	)
	msgs = _messages(diags)
	assert "call to 'process' expects 0 arguments, got 1" in msgs
	assert "argument 1 of 'register' expects string, got int" in msgs
	assert "undefined symbol 'nothing'" in msgs


def test_return_type_mismatch():
	_, diags = compile_source(
		HEADER
		+ """
function f(awslambda:Context c) returns json {
    return c;
}
"""
	)
	assert _messages(diags) == ["return type mismatch in 'f': expected json, got awslambda:Context"]


def test_diagnostics_point_into_source():
	_, diags = compile_source("function f(Unknown a) { }")
	assert diags[0].span.file == "main.bal"
	assert (diags[0].span.line, diags[0].span.column) == (1, 12)
