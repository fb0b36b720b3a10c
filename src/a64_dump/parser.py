# src/a64_dump/parser.py
from __future__ import annotations
from typing import Dict, List

from .lexer import (
    strip_comment,
    is_label,
    split_mnemonic_operands,
    split_operands,
)
from .ast import Instruction, Reg, Imm, Label, Mem, Operand
from .isa import spec
from .regs import is_reg, parse_register
from .utils import parse_int_literal
from .errors import ParseError

# Cada instrucción AArch64 ocupa 4 bytes
INSTRUCTION_STRIDE = 4

def parse_immediate(token: str) -> int:
    """Valor de un literal sin '#': hex (0x), binario (0b) o decimal."""
    try:
        return parse_int_literal(token)
    except ValueError as ex:
        raise ParseError(str(ex)) from ex

def parse_mem(token: str) -> Mem:
    """[base], [base, #off] o [base, index]. Sólo se mira la primera coma;
    la base es obligatoria ('[]' lanza InvalidRegister(''))."""
    inner = token.strip()[1:-1].strip()
    if "," not in inner:
        return Mem(base=parse_register(inner))
    base_raw, rest = inner.split(",", 1)
    base = parse_register(base_raw.strip())
    rest = rest.strip()
    if rest.startswith("#"):
        return Mem(base=base, offset=parse_immediate(rest[1:]))
    return Mem(base=base, index=parse_register(rest))

def parse_operand(token: str, labels: Dict[str, int]) -> Operand:
    t = token.strip()
    # memoria [...]
    if t.startswith("[") and t.endswith("]"):
        return parse_mem(t)
    # inmediato #valor
    if t.startswith("#"):
        return Imm(parse_immediate(t[1:]))
    # etiqueta definida en este mismo bloque
    if t in labels:
        return Label(t)
    if is_reg(t):
        return Reg(parse_register(t))
    # símbolo o dirección sin resolver ('1c <main+0x1c>')
    return Label(t)

def parse_instruction(line: str, address: int = 0, labels: Dict[str, int] | None = None) -> Instruction:
    """Clasifica una línea 'mnemónico op, op, ...' ya limpia de comentarios."""
    mnemonic, op_str = split_mnemonic_operands(line)
    if not mnemonic:
        raise ParseError("instrucción vacía")
    kind = spec(mnemonic).kind
    labels = labels or {}
    operands = tuple(parse_operand(tok, labels) for tok in split_operands(op_str))
    return Instruction(kind=kind, operands=operands, address=address)

def collect_labels(lines: List[str]) -> Dict[str, int]:
    """PASADA 1: etiqueta -> dirección (instrucciones previas * 4)."""
    labels: Dict[str, int] = {}
    address = 0
    for line in lines:
        if is_label(line):
            labels[line[:-1]] = address
        else:
            address += INSTRUCTION_STRIDE
    return labels

def parse(text: str) -> List[Instruction]:
    """
    Devuelve la lista de instrucciones de un bloque de una o más líneas.

    Reglas:
      - Comentarios: '//' (o ';') hasta fin de línea; líneas vacías se ignoran.
      - Etiquetas: 'name:' sin espacios; apuntan a la siguiente instrucción.
      - Instrucciones: mnemónico + operandos separados por comas fuera de [].
      - El primer error (ParseError, InvalidInstruction, InvalidRegister)
        se propaga sin resultados parciales.
    """
    lines = [core for core in (strip_comment(raw) for raw in text.splitlines()) if core]
    labels = collect_labels(lines)

    # PASADA 2
    out: List[Instruction] = []
    address = 0
    for line in lines:
        if is_label(line):
            continue
        out.append(parse_instruction(line, address, labels))
        address += INSTRUCTION_STRIDE
    return out
