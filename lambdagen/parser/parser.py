# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import re
from pathlib import Path
from typing import List

from lark import Lark, Token, Tree

from .ast import (
	PARAM_DEFAULTABLE,
	PARAM_REQUIRED,
	PARAM_REST,
	Annotation,
	AnyTypeExpr,
	Block,
	Call,
	Expr,
	ExprStmt,
	FunctionDef,
	ImportStmt,
	Literal,
	Located,
	Name,
	Param,
	Program,
	RecordDef,
	ReturnStmt,
	TypeExpr,
	UnionTypeExpr,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="program",
	propagate_positions=True,
	maybe_placeholders=False,
)


class ParamOrderError(ValueError):
	"""
	User-facing error for misordered parameters.

	Required parameters come first, then defaultable ones, then at most one
	rest parameter. The driver turns this into a parser-phase diagnostic.
	"""

	def __init__(self, message: str, *, loc: Located) -> None:
		super().__init__(message)
		self.loc = loc


class StringEscapeError(ValueError):
	"""User-facing error for an unknown or truncated escape in a string literal."""

	def __init__(self, message: str, *, loc: Located) -> None:
		super().__init__(message)
		self.loc = loc


_ESCAPE_RE = re.compile(r"\\(x[0-9A-Fa-f]{2}|u[0-9A-Fa-f]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"0": "\0",
	"\\": "\\",
	'"': '"',
	"'": "'",
}


def parse_program(source: str) -> Program:
	tree = _PARSER.parse(source)
	return _build_program(tree)


def _decode_string_token(tok: Token) -> str:
	"""Strip quotes and interpret backslash escapes; other text is kept as-is."""

	def _replace(match: re.Match) -> str:
		esc = match.group(1)
		if esc in _SIMPLE_ESCAPES:
			return _SIMPLE_ESCAPES[esc]
		if len(esc) > 1:
			return chr(int(esc[1:], 16))
		raise StringEscapeError(f"invalid escape sequence '\\{esc}' in string literal", loc=_loc_from_token(tok))

	return _ESCAPE_RE.sub(_replace, tok.value[1:-1])


def _build_program(tree: Tree) -> Program:
	prog = Program()
	for child in tree.children:
		kind = _name(child)
		if kind == "import_decl":
			prog.imports.append(_build_import(child))
		elif kind == "record_def":
			prog.records.append(_build_record(child))
		elif kind == "function_def":
			prog.functions.append(_build_function(child))
		else:
			raise TypeError(f"unexpected top-level node {kind}")
	return prog


def _build_import(tree: Tree) -> ImportStmt:
	names = [c for c in tree.children if isinstance(c, Token) and c.type == "NAME"]
	alias = None
	alias_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) == "import_alias"), None)
	if alias_node is not None:
		alias = alias_node.children[0].value
	return ImportStmt(org=names[0].value, module=names[1].value, alias=alias, loc=_loc(tree))


def _build_record(tree: Tree) -> RecordDef:
	name_tok = next(c for c in tree.children if isinstance(c, Token) and c.type == "NAME")
	return RecordDef(name=name_tok.value, loc=_loc(tree))


def _build_function(tree: Tree) -> FunctionDef:
	annotations: List[Annotation] = []
	public = False
	name_tok: Token | None = None
	params: List[Param] = []
	return_type: AnyTypeExpr | None = None
	body = Block()
	for child in tree.children:
		if isinstance(child, Token):
			if child.type == "PUBLIC":
				public = True
			elif child.type == "NAME":
				name_tok = child
			continue
		kind = _name(child)
		if kind in {"qualified_annotation", "local_annotation"}:
			annotations.append(_build_annotation(child))
		elif kind == "params":
			params = [_build_param(p) for p in child.children if isinstance(p, Tree)]
		elif kind == "returns":
			return_type = _build_type_expr(child.children[0])
		elif kind == "block":
			body = _build_block(child)
	if name_tok is None:
		raise TypeError("function_def missing name token")
	_check_param_order(params)
	loc = _loc_from_token(name_tok)
	return FunctionDef(
		name=name_tok.value,
		params=params,
		return_type=return_type,
		body=body,
		loc=loc,
		annotations=annotations,
		public=public,
	)


def _check_param_order(params: List[Param]) -> None:
	seen_defaultable = False
	for idx, param in enumerate(params):
		if param.kind == PARAM_REST and idx != len(params) - 1:
			raise ParamOrderError(f"rest parameter '{param.name}' must be the last parameter", loc=param.loc)
		if param.kind == PARAM_DEFAULTABLE:
			seen_defaultable = True
		elif param.kind == PARAM_REQUIRED and seen_defaultable:
			raise ParamOrderError(
				f"required parameter '{param.name}' cannot follow a defaultable parameter",
				loc=param.loc,
			)


def _build_annotation(tree: Tree) -> Annotation:
	names = [c.value for c in tree.children if isinstance(c, Token)]
	if _name(tree) == "qualified_annotation":
		return Annotation(tag=names[1], module_alias=names[0], loc=_loc(tree))
	return Annotation(tag=names[0], loc=_loc(tree))


def _build_param(tree: Tree) -> Param:
	kind = _name(tree)
	type_node = tree.children[0]
	name_tok = next(c for c in tree.children[1:] if isinstance(c, Token) and c.type == "NAME")
	type_expr = _build_type_expr(type_node)
	loc = _loc_from_token(name_tok)
	if kind == "required_param":
		return Param(name=name_tok.value, type_expr=type_expr, loc=loc)
	if kind == "defaultable_param":
		default = _build_expr(tree.children[-1])
		return Param(name=name_tok.value, type_expr=type_expr, loc=loc, kind=PARAM_DEFAULTABLE, default=default)
	if kind == "rest_param":
		return Param(name=name_tok.value, type_expr=type_expr, loc=loc, kind=PARAM_REST)
	raise TypeError(f"unexpected param node {kind}")


def _build_type_expr(tree: Tree) -> AnyTypeExpr:
	members = [_build_type_atom(c) for c in tree.children if isinstance(c, Tree)]
	if len(members) == 1:
		return members[0]
	return UnionTypeExpr(members=members, loc=_loc(tree))


def _build_type_atom(tree: Tree) -> TypeExpr:
	kind = _name(tree)
	if kind == "nil_type":
		return TypeExpr(name="()", loc=_loc(tree))
	toks = [c for c in tree.children if isinstance(c, Token)]
	if kind == "simple_type":
		return TypeExpr(name=toks[0].value, loc=_loc_from_token(toks[0]))
	if kind == "qualified_type":
		return TypeExpr(name=toks[1].value, module_alias=toks[0].value, loc=_loc_from_token(toks[0]))
	raise TypeError(f"unexpected type node {kind}")


def _build_block(tree: Tree) -> Block:
	return Block(statements=[_build_stmt(c) for c in tree.children if isinstance(c, Tree)])


def _build_stmt(tree: Tree):
	kind = _name(tree)
	if kind == "return_stmt":
		value = _build_expr(tree.children[0]) if tree.children else None
		return ReturnStmt(loc=_loc(tree), value=value)
	if kind == "expr_stmt":
		return ExprStmt(loc=_loc(tree), expr=_build_expr(tree.children[0]))
	raise TypeError(f"unexpected statement node {kind}")


def _build_expr(node) -> Expr:
	kind = _name(node)
	if kind == "string_lit":
		return Literal(value=_decode_string_token(node.children[0]), loc=_loc(node))
	if kind == "int_lit":
		return Literal(value=int(node.children[0].value), loc=_loc(node))
	if kind == "true_lit":
		return Literal(value=True, loc=_loc(node))
	if kind == "false_lit":
		return Literal(value=False, loc=_loc(node))
	if kind == "nil_lit":
		return Literal(value=None, loc=_loc(node))
	if kind == "var_ref":
		return _build_name(node.children[0])
	if kind == "call":
		func = _build_name(node.children[0])
		args: List[Expr] = []
		if len(node.children) > 1:
			args = [_build_expr(a) for a in node.children[1].children]
		return Call(func=func, args=args, loc=func.loc)
	raise TypeError(f"unexpected expression node {kind}")


def _build_name(tree: Tree) -> Name:
	toks = [c for c in tree.children if isinstance(c, Token)]
	if len(toks) == 2:
		return Name(ident=toks[1].value, module_alias=toks[0].value, loc=_loc_from_token(toks[0]))
	return Name(ident=toks[0].value, loc=_loc_from_token(toks[0]))


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=getattr(meta, "line", 0), column=getattr(meta, "column", 0))


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_program", "ParamOrderError", "StringEscapeError"]
