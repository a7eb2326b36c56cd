# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Two-part module identity: `(namespace, name)`, e.g. `ballerinax/awslambda`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModuleId:
	namespace: str
	name: str

	@classmethod
	def parse(cls, text: str) -> "ModuleId":
		"""Parse `namespace/name`; raises ValueError on any other shape."""
		parts = text.split("/")
		if len(parts) != 2 or not all(parts):
			raise ValueError(f"invalid module id '{text}', expected 'namespace/name'")
		return cls(namespace=parts[0], name=parts[1])

	def __str__(self) -> str:
		return f"{self.namespace}/{self.name}"


__all__ = ["ModuleId"]
