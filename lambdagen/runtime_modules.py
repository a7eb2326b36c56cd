# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Modules available to `import` without source: the runtime-support module
the lambda dispatcher ships, exposing

    type Context;
    annotation Function;
    function register(string name, function handler) returns ();
    function process() returns ();
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.module_id import ModuleId
from lambdagen.core.symbols import AnnotationSymbol, FunctionSymbol, ModuleSymbol, TypeSymbol
from lambdagen.core.types_core import TypeTable


class ModuleRegistry:
	"""ModuleId → ModuleSymbol lookup used by the resolver for imports."""

	def __init__(self, modules: Iterable[ModuleSymbol] = ()) -> None:
		self._modules: Dict[ModuleId, ModuleSymbol] = {}
		for mod in modules:
			self.add(mod)

	def add(self, module: ModuleSymbol) -> None:
		self._modules[module.module_id] = module

	def get(self, module_id: ModuleId) -> Optional[ModuleSymbol]:
		return self._modules.get(module_id)

	def __contains__(self, module_id: object) -> bool:
		return module_id in self._modules


def build_runtime_support_module(
	types: TypeTable,
	contract: HandlerContract = DEFAULT_CONTRACT,
	*,
	operations: Iterable[str] | None = None,
) -> ModuleSymbol:
	"""
	Build the runtime-support module symbol.

	`operations` restricts which of register/process are exported (all by
	default); tests use it to model a mismatched runtime version.
	"""
	mod_id = contract.runtime_module
	module = ModuleSymbol(name=mod_id.name, module=mod_id)
	module.scope.define(TypeSymbol(name=contract.context_type_name, module=mod_id, type=types.new_user(contract.context_type_name, mod_id)))
	module.scope.define(AnnotationSymbol(name=contract.marker_name, module=mod_id))
	nil = types.ensure_nil()
	signatures = {
		contract.register_op: types.new_function([types.ensure_string(), types.ensure_any_function()], nil),
		contract.process_op: types.new_function([], nil),
	}
	wanted = set(signatures) if operations is None else set(operations)
	for op_name, fn_type in signatures.items():
		if op_name in wanted:
			module.scope.define(FunctionSymbol(name=op_name, module=mod_id, type=fn_type, public=True))
	return module


def default_registry(types: TypeTable, contract: HandlerContract = DEFAULT_CONTRACT) -> ModuleRegistry:
	return ModuleRegistry([build_runtime_support_module(types, contract)])


__all__ = ["ModuleRegistry", "build_runtime_support_module", "default_registry"]
