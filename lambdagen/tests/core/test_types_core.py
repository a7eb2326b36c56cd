# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.core.module_id import ModuleId
from lambdagen.core.types_core import TypeKind, TypeTable, is_assignable

RT = ModuleId("ballerinax", "awslambda")


def test_type_table_builtins_are_stable():
	table = TypeTable()
	assert table.ensure_json() is table.ensure_json()
	assert table.ensure_json().kind is TypeKind.JSON
	assert table.ensure_error().kind is TypeKind.ERROR
	assert table.ensure_nil().kind is TypeKind.NIL
	assert table.lookup_builtin("string") is table.ensure_string()
	assert table.lookup_builtin("Context") is None


def test_user_defined_types_carry_origin():
	table = TypeTable()
	ctx = table.new_user("Context", RT)
	assert ctx.kind is TypeKind.USER_DEFINED
	assert ctx.origin == RT
	assert ctx.describe() == "awslambda:Context"
	assert ctx == TypeTable().new_user("Context", RT)
	assert ctx != table.new_user("Context", ModuleId("local", "main"))


def test_union_keeps_members_in_order_with_duplicates():
	table = TypeTable()
	u = table.new_union([table.ensure_json(), table.ensure_json()])
	assert u.kind is TypeKind.UNION
	assert len(u.members) == 2
	assert u.member_kinds() == {TypeKind.JSON}
	assert table.new_union([table.ensure_error(), table.ensure_json()]).describe() == "error|json"


def test_single_member_union_collapses():
	table = TypeTable()
	assert table.new_union([table.ensure_json()]) is table.ensure_json()


def test_assignability_rules():
	table = TypeTable()
	json_ty = table.ensure_json()
	err = table.ensure_error()
	handler_ret = table.new_union([json_ty, err])
	fn = table.new_function([json_ty], handler_ret)

	assert is_assignable(table.ensure_string(), json_ty)
	assert is_assignable(table.ensure_nil(), json_ty)
	assert not is_assignable(err, json_ty)
	assert is_assignable(err, handler_ret)
	assert is_assignable(json_ty, handler_ret)
	assert not is_assignable(table.new_user("Context", RT), handler_ret)
	assert is_assignable(fn, table.ensure_any_function())
	assert not is_assignable(json_ty, table.ensure_any_function())
	assert not is_assignable(table.ensure_unknown(), json_ty)
