'''
clase Diagnostic y helpers (archivo/línea, severidad, pista) para la CLI
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

from .errors import DumpError, InvalidInstruction, InvalidRegister, NotFound, ParseError

Severity = Literal["error", "warning", "note"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "warning": "WARNING",
    "note": "NOTE",
}

@dataclass(frozen=True)
class Diagnostic:
    """Problema que se reporta al usuario en lugar de una traza.

    Ubicación opcional (archivo y línea) y una pista para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}:"
        if loc:
            loc += " "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (hint: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, hint, file)

def warning(message: str, *, line: int | None = None,
            file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("warning", message, line, hint, file)

def note(message: str, *, line: int | None = None,
         file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo nota."""
    return Diagnostic("note", message, line, hint, file)

_HINTS = {
    NotFound: "run 'a64-dump list' to see the functions in the dump",
    InvalidInstruction: "the mnemonic is not in the AArch64 table",
    InvalidRegister: "expected x0-x30, w0-w30, sp, pc, xzr, wzr, fp or lr",
    ParseError: "immediates are '#0x..', '#0b..' or decimal",
}

def from_exception(ex: DumpError, *, file: str | None = None) -> Diagnostic:
    """Traduce una excepción del analizador a un diagnóstico de error."""
    hint = next((h for cls, h in _HINTS.items() if isinstance(ex, cls)), None)
    return error(str(ex), file=file, hint=hint)
