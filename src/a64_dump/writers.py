from __future__ import annotations
import logging
from typing import Iterable, List, Mapping

from .lexer import strip_comment, split_mnemonic_operands, split_operands
from .objdump import DumpEntry
from .semantic import interpret

logger = logging.getLogger(__name__)

SOURCE_WIDTH = 80
TABLE_HEADER = ["| Source | Assembly | Meaning |", "|--------|----------|---------|"]

LEVEL_TITLES = {
    "O0": "no optimization",
    "O1": "basic optimization",
    "O2": "aggressive optimization",
}

def format_source(code: str, width: int = SOURCE_WIDTH) -> str:
    """Flatten the ' <br> ' joins and cut long lines at a ',', ';', ')' or blank."""
    code = " ".join(code.replace("<br>", " ").split())
    if len(code) <= width:
        return code
    head = code[:width]
    pos = max(head.rfind(c) for c in ",;) ")
    if pos >= 0:
        return head[:pos + 1].strip() + "..."
    return code[:width - 3] + "..."

def _first_operands(asm: str, count: int) -> List[str]:
    _, op_str = split_mnemonic_operands(strip_comment(asm))
    return split_operands(op_str)[:count]

def basic_interpret(asm: str) -> str:
    """Rough meaning for a line the classifier rejected, from its prefix alone."""
    low = asm.lower()
    if low.startswith("ldp"):
        regs = _first_operands(asm, 2)
        return f"load {regs[0]} and {regs[1]} from memory" if len(regs) == 2 else "load register pair from memory"
    if low.startswith("stp"):
        regs = _first_operands(asm, 2)
        return f"store {regs[0]} and {regs[1]} to memory" if len(regs) == 2 else "store register pair to memory"
    if low.startswith("ldr"):
        regs = _first_operands(asm, 1)
        return f"load from memory into {regs[0]}" if regs else "load from memory"
    if low.startswith("str"):
        regs = _first_operands(asm, 1)
        return f"store {regs[0]} to memory" if regs else "store to memory"
    if low.startswith("bl "):
        return "call function"
    if low.startswith("b."):
        return "conditional jump"
    if low.startswith("b "):
        return "unconditional jump"
    if low.startswith("ccmp"):
        return "conditional compare"
    if low.startswith("mov"):
        regs = _first_operands(asm, 2)
        return f"{regs[0]} = {regs[1]}" if len(regs) == 2 else "move"
    if low.startswith("add"):
        return "addition"
    if low.startswith("sub"):
        return "subtraction"
    if low.startswith("cmp"):
        return "compare"
    if low.startswith("ret"):
        return "return from function"
    if low.startswith("nop"):
        return "no operation"
    return "instruction"

def to_table_lines(entries: Iterable[DumpEntry], *, source_width: int = SOURCE_WIDTH) -> List[str]:
    lines = list(TABLE_HEADER)
    current = ""
    for e in entries:
        # avisos: una fila con el texto completo
        if e.is_note:
            lines.append(f"| {e.source} | | |")
            continue
        if not e.source or e.source == current:
            source = ""
        else:
            current = e.source
            source = format_source(e.source, source_width)
        meaning = interpret(e.parsed) if e.parsed is not None else basic_interpret(e.asm)
        lines.append(f"| {source} | {e.asm} | {meaning} |")
    return lines

def render_table(entries: Iterable[DumpEntry], *, source_width: int = SOURCE_WIDTH) -> str:
    return "\n".join(to_table_lines(entries, source_width=source_width)) + "\n"

def instruction_count(entries: Iterable[DumpEntry]) -> int:
    return sum(1 for e in entries if not e.is_note)

def render_comparison(levels: Mapping[str, List[DumpEntry]], *, source_width: int = SOURCE_WIDTH) -> str:
    out = ["## Optimization level comparison", ""]
    for level, entries in levels.items():
        title = LEVEL_TITLES.get(level)
        out.append(f"### {level} ({title})" if title else f"### {level}")
        out.append("")
        out.append(render_table(entries, source_width=source_width))
    out.append("### Statistics")
    out.append("")
    for level, entries in levels.items():
        out.append(f"- {level}: {instruction_count(entries)} instructions")
    out.append("")
    return "\n".join(out) + "\n"

def write_markdown(content: str, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info("report saved to %s", path)
