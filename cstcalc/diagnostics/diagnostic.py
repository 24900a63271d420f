"""Diagnostics core types."""

from dataclasses import dataclass

from cstcalc.diagnostics.codes import DiagnosticSpec, Severity
from cstcalc.text import ZERO, TextRange


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the lexer, parser, grammar and visitor checks."""

    code: str
    message: str
    range: TextRange
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None

    @staticmethod
    def from_spec(
        spec: DiagnosticSpec,
        message: str | None = None,
        range: TextRange | None = None,
    ) -> "Diagnostic":
        """Build a diagnostic from a registered spec, optionally refining its message.

        Definition-time checks have no source text, so they default to an empty range.
        """
        return Diagnostic(
            code=spec.code,
            message=message if message is not None else spec.message,
            range=range if range is not None else TextRange.empty(ZERO),
            severity=spec.severity,
            hint=spec.hint,
            category=spec.category,
        )
