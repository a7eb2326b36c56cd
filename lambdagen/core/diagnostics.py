# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the front-end and the handler pass.

Passes never print: they append `Diagnostic` records to a `DiagnosticLog`
and the driver decides how to render them (human text or JSON).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .span import Span

SEVERITY_ERROR = "error"


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Phase label (parser, resolve, handlers, trace). The driver falls back to
	# the phase of the sink that collected the record when this is unset.
	phase: str | None = None
	severity: str = SEVERITY_ERROR
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == SEVERITY_ERROR

	def format_human(self) -> str:
		text = f"{self.span.render()}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text


class DiagnosticLog:
	"""
	Append-only diagnostic sink.

	`report` mirrors the host compiler's `logDiagnostic(kind, pos, message)`
	entry point; `phase` is stamped onto records that do not carry their own.
	"""

	def __init__(self, phase: str | None = None) -> None:
		self.phase = phase
		self._diagnostics: list[Diagnostic] = []

	def report(
		self,
		severity: str,
		span: Span | None,
		message: str,
		*,
		code: str | None = None,
		notes: list[str] | None = None,
	) -> Diagnostic:
		diag = Diagnostic(
			message=message,
			code=code,
			phase=self.phase,
			severity=severity,
			span=span if span is not None else Span(),
			notes=list(notes or []),
		)
		self._diagnostics.append(diag)
		return diag

	def error(self, span: Span | None, message: str, **kwargs) -> Diagnostic:
		return self.report(SEVERITY_ERROR, span, message, **kwargs)

	def extend(self, diags: list[Diagnostic]) -> None:
		for diag in diags:
			if diag.phase is None:
				diag.phase = self.phase
			self._diagnostics.append(diag)

	@property
	def diagnostics(self) -> list[Diagnostic]:
		return list(self._diagnostics)

	def has_errors(self) -> bool:
		return any(d.is_error for d in self._diagnostics)

	def __iter__(self) -> Iterator[Diagnostic]:
		return iter(list(self._diagnostics))

	def __len__(self) -> int:
		return len(self._diagnostics)


__all__ = ["Diagnostic", "DiagnosticLog", "SEVERITY_ERROR"]
