'''
listado de objdump: fronteras de función, separación código fuente/instrucciones
'''

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from functools import reduce
from typing import List, Optional, Tuple, Union

from .ast import Instruction
from .errors import DumpError, NotFound
from .parser import parse

logger = logging.getLogger(__name__)

HEADER_RE       = re.compile(r"^[0-9a-f]+\s+<([^>]+)>:")
NEXT_HEADER_RE  = re.compile(r"^[0-9a-f]+\s+<\w+>:")
SECTION_RE      = re.compile(r"^Disassembly of section")
ASM_RE          = re.compile(r"^\s*([0-9a-f]+):\s+([0-9a-f]+)\s+(.+)$")
INLINE_RE       = re.compile(r"<([^>]+\.part\.\d+)>")
SOURCE_PATH_RE  = re.compile(r"^/.*:\d+")

# Une las líneas de fuente previas a la primera instrucción (firma de la función)
PROLOGUE_JOINER = " <br> "

_BANNER_PREFIXES = ("Disassembly", "objdump", "file format")
_DIRECTIVE_PREFIXES = ("#endif", "#ifdef", "#else", "ERROR:")

def helper_note(helper: str) -> str:
    return ("Note: the main logic may have been moved by the compiler; "
            f"it actually runs in the compiler-generated helper <{helper}>")

# ---------- Registros del listado ----------

@dataclass(frozen=True)
class DumpEntry:
    """Una instrucción del listado con el código fuente que la precede.

    - source_line: índice (0-based) de la línea de fuente vigente, si la hay
    - source: texto de fuente vigente (el prólogo une varias líneas con ' <br> ')
    - address / machine_code / asm: columnas crudas de objdump
    - parsed: instrucción clasificada, o None si el clasificador la rechazó
    """
    source_line: Optional[int]
    source: str
    address: str
    machine_code: str
    asm: str
    parsed: Optional[Instruction] = None

    @property
    def is_note(self) -> bool:
        """Entrada sintética de aviso (sin instrucción)."""
        return not self.asm

@dataclass(frozen=True)
class _AsmLine:
    index: int
    address: str
    machine_code: str
    asm: str

@dataclass(frozen=True)
class _SourceLine:
    index: int
    text: str

_Line = Union[_AsmLine, _SourceLine]

@dataclass(frozen=True)
class _Fold:
    """Estado acumulado: fuente vigente + entradas emitidas."""
    source_line: Optional[int] = None
    source: str = ""
    entries: Tuple[DumpEntry, ...] = ()

# ---------- Helpers internos ----------

def _is_noise(cleaned: str) -> bool:
    return (not cleaned
            or cleaned.startswith(_BANNER_PREFIXES)
            or SOURCE_PATH_RE.match(cleaned) is not None
            or cleaned in ("{", "}")
            or cleaned.startswith(_DIRECTIVE_PREFIXES))

def classify_instruction(asm: str) -> Optional[Instruction]:
    """Clasifica el texto de una instrucción; un fallo degrada a None."""
    try:
        parsed = parse(asm)
    except DumpError as ex:
        logger.debug("instrucción sin clasificar %r: %s", asm, ex)
        return None
    return parsed[0] if parsed else None

def _step(state: _Fold, line: _Line) -> _Fold:
    if isinstance(line, _SourceLine):
        return _Fold(line.index, line.text, state.entries)
    entry = DumpEntry(
        source_line=state.source_line,
        source=state.source,
        address=line.address,
        machine_code=line.machine_code,
        asm=line.asm,
        parsed=classify_instruction(line.asm),
    )
    return _Fold(state.source_line, state.source, state.entries + (entry,))

# ---------- Listado ----------

class ObjdumpListing:
    """Texto completo de un volcado 'objdump -d -S' partido en líneas."""

    def __init__(self, content: str):
        self.lines: List[str] = content.splitlines()

    @classmethod
    def from_file(cls, path: str) -> "ObjdumpListing":
        with open(path, "r", encoding="utf-8") as f:
            return cls(f.read())

    def find_function(self, name: str) -> Tuple[int, int]:
        """(inicio, fin) de la función: su cabecera hasta antes de la siguiente
        cabecera o marca de sección, o hasta la última línea."""
        pattern = re.compile(r"^[0-9a-f]+\s+<" + re.escape(name) + r">:")
        start = next((i for i, line in enumerate(self.lines) if pattern.match(line)), None)
        if start is None:
            raise NotFound(name)
        for i in range(start + 1, len(self.lines)):
            line = self.lines[i]
            if NEXT_HEADER_RE.match(line) or SECTION_RE.match(line):
                return start, i - 1
        return start, len(self.lines) - 1

    def list_functions(self) -> List[str]:
        """Nombres de todas las cabeceras en orden de aparición (con repetidos)."""
        out = []
        for line in self.lines:
            m = HEADER_RE.match(line)
            if m:
                out.append(m.group(1))
        return out

    def inline_helper(self, start: int, end: int) -> Optional[str]:
        """Primer '<callee.part.N>' dentro del rango, si existe."""
        for i in range(start + 1, end + 1):
            m = INLINE_RE.search(self.lines[i])
            if m:
                return m.group(1)
        return None

    def _classify_lines(self, start: int, end: int) -> List[_Line]:
        out: List[_Line] = []
        for i in range(start + 1, end + 1):
            line = self.lines[i]
            m = ASM_RE.match(line)
            if m:
                out.append(_AsmLine(i, m.group(1), m.group(2), m.group(3).strip()))
                continue
            cleaned = line.strip()
            if not _is_noise(cleaned):
                out.append(_SourceLine(i, cleaned))
        return out

    def extract_function(self, name: str) -> List[DumpEntry]:
        """Entradas de la función en orden del listado.

        Las líneas de fuente anteriores a la primera instrucción se funden en
        un único prólogo; después, cada línea de fuente queda vigente para
        todas las instrucciones siguientes hasta que aparezca otra.
        """
        start, end = self.find_function(name)
        lines = self._classify_lines(start, end)

        first_asm = next((k for k, ln in enumerate(lines) if isinstance(ln, _AsmLine)), None)
        if first_asm is None:
            logger.info("función %s sin instrucciones", name)
            return []
        prologue = lines[:first_asm]
        body = lines[first_asm:]
        if prologue:
            joined = PROLOGUE_JOINER.join(ln.text for ln in prologue)
            body = [_SourceLine(prologue[-1].index, joined)] + body

        entries = list(reduce(_step, body, _Fold()).entries)

        helper = self.inline_helper(start, end)
        if helper is not None and entries:
            entries.append(DumpEntry(None, helper_note(helper), "", "", ""))
        logger.info("función %s: %d entradas", name, len(entries))
        return entries
