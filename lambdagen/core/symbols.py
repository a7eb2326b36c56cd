# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolved symbols and scopes.

Symbols compare by identity (`eq=False`): two functions with the same name in
different modules are different symbols, and a reference node must point at
the exact symbol object the resolver produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .module_id import ModuleId
from .types_core import TypeRef


@dataclass(eq=False)
class Symbol:
	"""Base class for all named, resolved entities."""

	name: str
	module: ModuleId


@dataclass(eq=False)
class FunctionSymbol(Symbol):
	"""
	A callable; `type` is always a FUNCTION TypeRef.

	`type.params` lists every parameter (required, defaultable, rest element).
	`required_count` is the number of leading parameters a call must supply
	(None means all of them); `variadic` marks a trailing rest parameter.
	"""

	type: TypeRef
	public: bool = False
	required_count: int | None = None
	variadic: bool = False

	def arity(self) -> tuple[int, int | None]:
		"""(min, max) argument count; max is None for variadic functions."""
		params = self.type.params or ()
		fixed = len(params) - 1 if self.variadic else len(params)
		lo = self.required_count if self.required_count is not None else fixed
		return lo, (None if self.variadic else fixed)

	def param_type_at(self, index: int) -> TypeRef | None:
		params = self.type.params or ()
		if index < len(params) - (1 if self.variadic else 0):
			return params[index]
		if self.variadic and params:
			return params[-1]
		return None


@dataclass(eq=False)
class VariableSymbol(Symbol):
	"""A function parameter visible inside the function body."""

	type: TypeRef


@dataclass(eq=False)
class TypeSymbol(Symbol):
	type: TypeRef


@dataclass(eq=False)
class AnnotationSymbol(Symbol):
	"""
	An annotation tag declared by a module.

	Marker identity is `(module.namespace, module.name, name)`.
	"""

	@property
	def identity(self) -> tuple[str, str, str]:
		return (self.module.namespace, self.module.name, self.name)


class Scope:
	"""Flat name → symbol table (one per module / compilation unit)."""

	def __init__(self, owner: ModuleId) -> None:
		self.owner = owner
		self._entries: Dict[str, Symbol] = {}

	def define(self, symbol: Symbol) -> bool:
		"""Bind `symbol`; returns False (and binds nothing) if the name is taken."""
		if symbol.name in self._entries:
			return False
		self._entries[symbol.name] = symbol
		return True

	def lookup(self, name: str) -> Optional[Symbol]:
		return self._entries.get(name)

	def lookup_function(self, name: str) -> Optional[FunctionSymbol]:
		sym = self._entries.get(name)
		return sym if isinstance(sym, FunctionSymbol) else None

	def __contains__(self, name: object) -> bool:
		return name in self._entries

	def __iter__(self) -> Iterator[Symbol]:
		return iter(list(self._entries.values()))

	def __len__(self) -> int:
		return len(self._entries)


@dataclass(eq=False)
class ModuleSymbol(Symbol):
	"""A module as seen through an import: its exported scope."""

	scope: Scope = field(default=None)  # type: ignore[assignment]

	def __post_init__(self) -> None:
		if self.scope is None:
			self.scope = Scope(self.module)

	@property
	def module_id(self) -> ModuleId:
		return self.module


__all__ = ["Symbol", "FunctionSymbol", "VariableSymbol", "TypeSymbol", "AnnotationSymbol", "ModuleSymbol", "Scope"]
