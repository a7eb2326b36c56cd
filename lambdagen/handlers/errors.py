# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Internal errors of the handler pass.

None of these are user diagnostics: each one means the unit or the
runtime-support module is inconsistent with this pass, so the driver reports
it as an internal compiler error.
"""

from __future__ import annotations

from lambdagen.core.module_id import ModuleId


class HandlerPassError(RuntimeError):
	"""Base class for internal handler-pass failures."""


class MissingRuntimeModuleError(HandlerPassError):
	"""The unit has handlers but does not import the runtime-support module."""

	def __init__(self, module_id: ModuleId) -> None:
		super().__init__(f"runtime support module '{module_id}' is not imported by the unit")
		self.module_id = module_id


class MissingRuntimeOperationError(HandlerPassError):
	"""The runtime-support module does not export a required operation."""

	def __init__(self, module_id: ModuleId, operation: str) -> None:
		super().__init__(f"runtime support module '{module_id}' does not export function '{operation}'")
		self.module_id = module_id
		self.operation = operation


class EntryPointConflictError(HandlerPassError):
	"""The entry-point name is already bound in the unit scope."""

	def __init__(self, name: str) -> None:
		super().__init__(f"entry point name '{name}' is already defined in the unit")
		self.name = name


__all__ = [
	"HandlerPassError",
	"MissingRuntimeModuleError",
	"MissingRuntimeOperationError",
	"EntryPointConflictError",
]
