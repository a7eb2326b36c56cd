# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Handler pass: find annotated handler functions, validate their signatures and
synthesize the entry point that registers them with the runtime dispatcher.

  scanner      has_handler_marker
  validator    check_handler_signature / is_valid_handler_signature
  collector    collect_handlers (owns the diagnostics)
  synthesizer  EntryPointBuilder / synthesize_entry_point
  pipeline     run_handler_pass (collect → synthesize)
"""

from .collector import CollectResult, collect_handlers
from .errors import EntryPointConflictError, HandlerPassError, MissingRuntimeModuleError, MissingRuntimeOperationError
from .pipeline import HandlerPassResult, run_handler_pass
from .scanner import has_handler_marker
from .synthesizer import EntryPointBuilder, RuntimeSupport, find_runtime_support, synthesize_entry_point
from .validator import SignatureViolation, check_handler_signature, is_valid_handler_signature

__all__ = [
	"CollectResult",
	"collect_handlers",
	"EntryPointConflictError",
	"HandlerPassError",
	"MissingRuntimeModuleError",
	"MissingRuntimeOperationError",
	"HandlerPassResult",
	"run_handler_pass",
	"has_handler_marker",
	"EntryPointBuilder",
	"RuntimeSupport",
	"find_runtime_support",
	"synthesize_entry_point",
	"SignatureViolation",
	"check_handler_signature",
	"is_valid_handler_signature",
]
