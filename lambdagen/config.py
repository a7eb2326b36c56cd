# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Handler contract: the fixed names the handler pass agrees on with the
runtime-support module.

The synthesized entry point calls `register(name, fn)` once per handler and
then `process()`; both operations, the `Context` type and the handler
annotation live in the runtime-support module identified by `runtime_module`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from lambdagen.core.module_id import ModuleId

RUNTIME_MODULE = ModuleId("ballerinax", "awslambda")
ENTRY_POINT_NAME = "__d47ff0e4_cb4f_40a7_acde_5daf8f50043c"


@dataclass(frozen=True)
class HandlerContract:
	runtime_module: ModuleId = RUNTIME_MODULE
	marker_name: str = "Function"
	context_type_name: str = "Context"
	entry_point_name: str = ENTRY_POINT_NAME
	register_op: str = "register"
	process_op: str = "process"
	trace_suffix: str = ".txt"

	@property
	def marker_identity(self) -> tuple[str, str, str]:
		return (self.runtime_module.namespace, self.runtime_module.name, self.marker_name)

	@property
	def expected_signature(self) -> str:
		return f"public function ({self.runtime_module.name}:{self.context_type_name}, json) returns json|error"

	def invalid_signature_message(self, name: str) -> str:
		return f"Invalid function signature for an AWS lambda function: {name}, it should be '{self.expected_signature}'"

	def with_entry_point(self, name: str) -> "HandlerContract":
		return replace(self, entry_point_name=name)


DEFAULT_CONTRACT = HandlerContract()


__all__ = ["HandlerContract", "DEFAULT_CONTRACT", "RUNTIME_MODULE", "ENTRY_POINT_NAME"]
