# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Handler signature validation.

A handler must look like:

    public function (awslambda:Context, json) returns json|error

The checks run in a fixed order and the first failing one is reported; the
validator itself never emits diagnostics (the collector does).
"""

from __future__ import annotations

from enum import Enum

from lambdagen.config import DEFAULT_CONTRACT, HandlerContract
from lambdagen.core.tree import FunctionDecl
from lambdagen.core.types_core import TypeKind, TypeRef


class SignatureViolation(Enum):
	"""First failed check; the value is the note attached to the diagnostic."""

	PARAM_SHAPE = "a handler takes exactly two required parameters and no defaultable or rest parameters"
	CONTEXT_PARAM = "the first parameter must be the runtime support Context type"
	PAYLOAD_PARAM = "the second parameter must be of type json"
	RETURN_NOT_UNION = "the return type must be a union"
	RETURN_ARITY = "the return type union must have exactly two members"
	RETURN_MEMBERS = "the return type union may only contain json and error"


# Union member kinds accepted in a handler's return type.
_RETURN_KINDS = frozenset({TypeKind.JSON, TypeKind.ERROR})


def _is_context_type(ty: TypeRef, contract: HandlerContract) -> bool:
	if ty.kind is not TypeKind.USER_DEFINED or ty.origin is None:
		return False
	if ty.name != contract.context_type_name:
		return False
	origin = ty.origin
	return origin.namespace == contract.runtime_module.namespace and origin.name == contract.runtime_module.name


def check_handler_signature(decl: FunctionDecl, contract: HandlerContract = DEFAULT_CONTRACT) -> SignatureViolation | None:
	"""Return the first violated rule, or None if `decl` is a valid handler."""
	if len(decl.required_params) != 2 or decl.defaultable_params or decl.rest_param is not None:
		return SignatureViolation.PARAM_SHAPE
	ctx_param, payload_param = decl.required_params
	if not _is_context_type(ctx_param.type, contract):
		return SignatureViolation.CONTEXT_PARAM
	if payload_param.type.kind is not TypeKind.JSON:
		return SignatureViolation.PAYLOAD_PARAM
	ret = decl.return_type
	if ret.kind is not TypeKind.UNION:
		return SignatureViolation.RETURN_NOT_UNION
	# Member count is on the written members; `json|json` passes this check
	# and is then accepted by the kind-set check below.
	if len(ret.members) != 2:
		return SignatureViolation.RETURN_ARITY
	if ret.member_kinds() - _RETURN_KINDS:
		return SignatureViolation.RETURN_MEMBERS
	return None


def is_valid_handler_signature(decl: FunctionDecl, contract: HandlerContract = DEFAULT_CONTRACT) -> bool:
	return check_handler_signature(decl, contract) is None


__all__ = ["SignatureViolation", "check_handler_signature", "is_valid_handler_signature"]
