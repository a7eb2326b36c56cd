# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Entry-point synthesis.

For handlers [h1, ..., hN] the synthesized function is:

    public function <entry>() {
        awslambda:register("h1", h1);
        ...
        awslambda:register("hN", hN);
        awslambda:process();
    }

`EntryPointBuilder` assembles the whole declaration off-tree; `commit` is the
only step that touches the unit (scope binding + append), so any failure
while building leaves the unit exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.symbols import FunctionSymbol, ModuleSymbol
from lambdagen.core.tree import Block, Call, CompilationUnit, Expr, ExprStmt, FunctionDecl, Literal, VarRef
from lambdagen.core.types_core import TypeTable
from lambdagen.handlers.errors import EntryPointConflictError, MissingRuntimeModuleError, MissingRuntimeOperationError


@dataclass(frozen=True)
class RuntimeSupport:
	"""
	Resolved runtime-support module as imported by one unit.

	`prefix` is the alias the unit uses for the module; synthesized calls are
	spelled with it so the printed entry point reads like user code.
	"""

	module: ModuleSymbol
	prefix: str

	def operation(self, name: str) -> FunctionSymbol:
		sym = self.module.scope.lookup_function(name)
		if sym is None:
			raise MissingRuntimeOperationError(self.module.module_id, name)
		return sym


def find_runtime_support(unit: CompilationUnit, contract: HandlerContract = DEFAULT_CONTRACT) -> RuntimeSupport:
	imp = unit.find_import(contract.runtime_module)
	if imp is None:
		raise MissingRuntimeModuleError(contract.runtime_module)
	return RuntimeSupport(module=imp.symbol, prefix=imp.prefix)


class EntryPointBuilder:
	"""Builds the entry-point declaration, then commits it to the unit once."""

	def __init__(
		self,
		unit: CompilationUnit,
		runtime: RuntimeSupport,
		*,
		contract: HandlerContract = DEFAULT_CONTRACT,
		types: TypeTable | None = None,
	) -> None:
		self._unit = unit
		self._runtime = runtime
		self._contract = contract
		self._types = types or TypeTable()
		self._span = unit.span
		self._committed = False
		nil = self._types.ensure_nil()
		symbol = FunctionSymbol(
			name=contract.entry_point_name,
			module=unit.module_id,
			type=self._types.new_function([], nil),
			public=True,
		)
		self._decl = FunctionDecl(
			name=contract.entry_point_name,
			symbol=symbol,
			return_type=nil,
			body=Block(statements=[], span=self._span),
			public=True,
			span=self._span,
		)

	@property
	def decl(self) -> FunctionDecl:
		return self._decl

	def _runtime_call(self, op_name: str, args: list[Expr]) -> ExprStmt:
		callee = self._runtime.operation(op_name)
		call = Call(
			name=op_name,
			symbol=callee,
			args=args,
			type=self._types.ensure_nil(),
			qualifier=self._runtime.prefix,
			span=self._span,
		)
		return ExprStmt(expr=call, span=self._span)

	def add_register(self, handler: FunctionDecl) -> None:
		"""Append `register("<name>", <handler>)`; argument order is (name, function)."""
		name_arg = Literal(value=handler.name, type=self._types.ensure_string(), span=self._span)
		fn_arg = VarRef(name=handler.name, symbol=handler.symbol, type=handler.symbol.type, span=self._span)
		self._decl.body.add_statement(self._runtime_call(self._contract.register_op, [name_arg, fn_arg]))

	def add_process(self) -> None:
		self._decl.body.add_statement(self._runtime_call(self._contract.process_op, []))

	def commit(self) -> FunctionDecl:
		"""Bind the entry point in the unit scope and append it to the unit."""
		if self._committed:
			raise RuntimeError("entry point already committed")
		if not self._unit.scope.define(self._decl.symbol):
			raise EntryPointConflictError(self._decl.name)
		self._unit.add_function(self._decl)
		self._committed = True
		return self._decl


def synthesize_entry_point(
	unit: CompilationUnit,
	handlers: Sequence[FunctionDecl],
	*,
	runtime: RuntimeSupport | None = None,
	contract: HandlerContract = DEFAULT_CONTRACT,
	types: TypeTable | None = None,
) -> FunctionDecl | None:
	"""
	Add the entry point for `handlers` to `unit` and return it.

	No-op (returns None) when `handlers` is empty. `runtime` defaults to the
	unit's import of the runtime-support module; a missing import or missing
	operation raises before the unit is touched.
	"""
	if not handlers:
		return None
	if runtime is None:
		runtime = find_runtime_support(unit, contract)
	if contract.entry_point_name in unit.scope:
		raise EntryPointConflictError(contract.entry_point_name)
	builder = EntryPointBuilder(unit, runtime, contract=contract, types=types)
	for handler in handlers:
		builder.add_register(handler)
	builder.add_process()
	return builder.commit()


__all__ = ["RuntimeSupport", "find_runtime_support", "EntryPointBuilder", "synthesize_entry_point"]
