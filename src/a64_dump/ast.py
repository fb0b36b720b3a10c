'''
dataclases de operandos e instrucción (Reg, Imm, Label, Mem, Instruction)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .isa import InstructionKind
from .regs import Condition, Register

# ---- Operandos ----

@dataclass(frozen=True)
class Reg:
    """Registro de propósito general."""
    reg: Register

    @property
    def name(self) -> str:
        return self.reg.value

@dataclass(frozen=True)
class Imm:
    """Inmediato '#valor' (entero con signo de 64 bits)."""
    value: int

@dataclass(frozen=True)
class Label:
    """Destino de rama, etiqueta local o símbolo sin resolver (p.ej. '1c <main+0x1c>')."""
    name: str

@dataclass(frozen=True)
class Mem:
    """Dirección entre corchetes: [base], [base, #off] o [base, index].

    pre_indexed/post_indexed existen en el modelo pero la gramática de
    corchetes nunca los activa.
    """
    base: Register
    offset: Optional[int] = None
    index: Optional[Register] = None
    pre_indexed: bool = False
    post_indexed: bool = False

Operand = Union[Reg, Imm, Label, Mem]

# ---- Instrucción ----

@dataclass(frozen=True)
class Instruction:
    """Instrucción clasificada: tipo, operandos tipados y dirección.

    encoding y condition no se rellenan desde texto; quedan para otras fuentes.
    """
    kind: InstructionKind
    operands: Tuple[Operand, ...]
    address: int
    encoding: Optional[int] = None
    condition: Optional[Condition] = None
