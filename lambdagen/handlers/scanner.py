# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.tree import FunctionDecl


def has_handler_marker(decl: FunctionDecl, contract: HandlerContract = DEFAULT_CONTRACT) -> bool:
	"""True iff one of `decl`'s markers is the handler annotation (namespace, module, tag)."""
	wanted = contract.marker_identity
	return any(marker.identity == wanted for marker in decl.markers)


__all__ = ["has_handler_marker"]
