# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Minimal resolved type descriptors.

`TypeRef` is a closed tagged variant: `kind` selects which payload fields are
meaningful.

- USER_DEFINED: `name` + `origin` (the declaring module)
- UNION: `members` in declaration order (duplicates are kept; consumers that
  need set semantics collapse them themselves)
- FUNCTION: `params` + `ret`; `params is None` denotes the untyped
  "any function" value type
- everything else: `name` only

TypeTable hands out canonical builtins so callers do not spell names twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from .module_id import ModuleId


class TypeKind(Enum):
	"""Kinds of types the front-end resolves."""

	JSON = auto()
	ERROR = auto()
	STRING = auto()
	INT = auto()
	BOOLEAN = auto()
	NIL = auto()
	USER_DEFINED = auto()
	UNION = auto()
	FUNCTION = auto()
	UNKNOWN = auto()


@dataclass(frozen=True)
class TypeRef:
	"""Resolved type descriptor (see module docstring for payload rules)."""

	kind: TypeKind
	name: str
	origin: Optional[ModuleId] = None
	members: Tuple["TypeRef", ...] = ()
	params: Optional[Tuple["TypeRef", ...]] = None
	ret: Optional["TypeRef"] = None

	def member_kinds(self) -> set[TypeKind]:
		return {m.kind for m in self.members}

	def describe(self) -> str:
		"""Surface-like spelling, used by diagnostics and the printer."""
		if self.kind is TypeKind.UNION:
			return "|".join(m.describe() for m in self.members)
		if self.kind is TypeKind.USER_DEFINED and self.origin is not None:
			return f"{self.origin.name}:{self.name}"
		if self.kind is TypeKind.FUNCTION and self.params is not None:
			params = ", ".join(p.describe() for p in self.params)
			ret = self.ret.describe() if self.ret is not None else "()"
			return f"function ({params}) returns {ret}"
		return self.name


# Builtin spellings accepted by the resolver.
_BUILTINS: dict[str, TypeKind] = {
	"json": TypeKind.JSON,
	"error": TypeKind.ERROR,
	"string": TypeKind.STRING,
	"int": TypeKind.INT,
	"boolean": TypeKind.BOOLEAN,
	"()": TypeKind.NIL,
	"function": TypeKind.FUNCTION,
}

# Kinds a `json` slot accepts besides JSON itself.
_JSON_COMPATIBLE = {TypeKind.JSON, TypeKind.STRING, TypeKind.INT, TypeKind.BOOLEAN, TypeKind.NIL}


class TypeTable:
	"""
	Factory for TypeRefs.

	Builtins are created once and reused so identity comparisons stay cheap
	in the common case; structural equality still holds for every TypeRef.
	"""

	def __init__(self) -> None:
		self._builtins: dict[str, TypeRef] = {}

	def _builtin(self, name: str) -> TypeRef:
		ty = self._builtins.get(name)
		if ty is None:
			ty = TypeRef(kind=_BUILTINS[name], name=name)
			self._builtins[name] = ty
		return ty

	def ensure_json(self) -> TypeRef:
		return self._builtin("json")

	def ensure_error(self) -> TypeRef:
		return self._builtin("error")

	def ensure_string(self) -> TypeRef:
		return self._builtin("string")

	def ensure_int(self) -> TypeRef:
		return self._builtin("int")

	def ensure_boolean(self) -> TypeRef:
		return self._builtin("boolean")

	def ensure_nil(self) -> TypeRef:
		return self._builtin("()")

	def ensure_any_function(self) -> TypeRef:
		"""The untyped function value type (`function`)."""
		return self._builtin("function")

	def ensure_unknown(self) -> TypeRef:
		ty = self._builtins.get("<unknown>")
		if ty is None:
			ty = TypeRef(kind=TypeKind.UNKNOWN, name="<unknown>")
			self._builtins["<unknown>"] = ty
		return ty

	def lookup_builtin(self, name: str) -> TypeRef | None:
		"""Return the builtin named `name`, or None if it is not a builtin."""
		if name not in _BUILTINS:
			return None
		return self._builtin(name)

	def new_user(self, name: str, origin: ModuleId) -> TypeRef:
		"""Register a user-defined type declared in module `origin`."""
		return TypeRef(kind=TypeKind.USER_DEFINED, name=name, origin=origin)

	def new_union(self, members: list[TypeRef]) -> TypeRef:
		"""Union of `members`; single-member unions collapse to the member."""
		if len(members) == 1:
			return members[0]
		name = "|".join(m.describe() for m in members)
		return TypeRef(kind=TypeKind.UNION, name=name, members=tuple(members))

	def new_function(self, params: list[TypeRef], ret: TypeRef) -> TypeRef:
		return TypeRef(kind=TypeKind.FUNCTION, name="function", params=tuple(params), ret=ret)


def is_assignable(src: TypeRef, dst: TypeRef) -> bool:
	"""
	Best-effort assignability used by post-synthesis validation.

	Rules: identical types; any member of a union destination; json accepts
	scalars and nil; the untyped function type accepts any function.
	"""
	if src == dst:
		return True
	if src.kind is TypeKind.UNKNOWN or dst.kind is TypeKind.UNKNOWN:
		return False
	if dst.kind is TypeKind.UNION:
		if src.kind is TypeKind.UNION:
			return all(is_assignable(m, dst) for m in src.members)
		return any(is_assignable(src, m) for m in dst.members)
	if dst.kind is TypeKind.JSON:
		return src.kind in _JSON_COMPATIBLE
	if dst.kind is TypeKind.FUNCTION and dst.params is None:
		return src.kind is TypeKind.FUNCTION
	return False


__all__ = ["TypeKind", "TypeRef", "TypeTable", "is_assignable"]
