'''
intérprete semántico: Instruction -> frase legible
'''

from __future__ import annotations
from typing import Callable, Dict

from .ast import Instruction, Reg, Imm, Label, Mem, Operand
from .isa import InstructionKind, KIND_CONDITION
from .regs import Condition
from .utils import fmt_imm, to_hex

K = InstructionKind
Rule = Callable[[Instruction], str]

# ---------------- Operandos ----------------

def operand_name(op: Operand) -> str:
    if isinstance(op, Reg):
        return op.name
    if isinstance(op, Imm):
        return fmt_imm(op.value)
    if isinstance(op, Label):
        return op.name
    if isinstance(op, Mem):
        out = op.base.value
        if op.offset is not None:
            out += f"+{to_hex(op.offset)}" if op.offset >= 0 else f"-{to_hex(-op.offset)}"
        if op.index is not None:
            out += f"+{op.index.value}"
        return f"[{out}]"
    raise TypeError(f"operando desconocido: {op!r}")

def memory_desc(op: Operand) -> str:
    """'(SP + 0x8)', '(X1 - 0x10)', '(X0 + X1)'; otros operandos por nombre."""
    if not isinstance(op, Mem):
        return operand_name(op)
    desc = f"({op.base.value}"
    if op.offset is not None:
        desc += f" + {to_hex(op.offset)}" if op.offset >= 0 else f" - {to_hex(-op.offset)}"
    if op.index is not None:
        desc += f" + {op.index.value}"
    return desc + ")"

# ---------------- Reglas ----------------

def _triad(symbol: str, fallback: str, suffix: str = "") -> Rule:
    def rule(ins: Instruction) -> str:
        if len(ins.operands) < 3:
            return fallback
        d, a, b = (operand_name(op) for op in ins.operands[:3])
        return f"{d} = {a} {symbol} {b}{suffix}"
    return rule

def _load(verb: str, fallback: str, pair: bool = False) -> Rule:
    def rule(ins: Instruction) -> str:
        ops = ins.operands
        if len(ops) < (3 if pair else 2):
            return fallback
        if pair:
            return f"from {memory_desc(ops[2])} {verb} into {operand_name(ops[0])}, {operand_name(ops[1])}"
        return f"from {memory_desc(ops[1])} {verb} into {operand_name(ops[0])}"
    return rule

def _store(verb: str, fallback: str, pair: bool = False) -> Rule:
    def rule(ins: Instruction) -> str:
        ops = ins.operands
        if len(ops) < (3 if pair else 2):
            return fallback
        if pair:
            return f"{verb} {operand_name(ops[0])}, {operand_name(ops[1])} into {memory_desc(ops[2])}"
        return f"{verb} {operand_name(ops[0])} into {memory_desc(ops[1])}"
    return rule

def _move(fallback: str, note: str = "") -> Rule:
    def rule(ins: Instruction) -> str:
        if len(ins.operands) < 2:
            return fallback
        return f"{operand_name(ins.operands[0])} = {operand_name(ins.operands[1])}{note}"
    return rule

def _compare(ins: Instruction) -> str:
    if len(ins.operands) < 2:
        return "compare"
    a, b = operand_name(ins.operands[0]), operand_name(ins.operands[1])
    return f"compare {a} and {b} (sets flags)"

def _branch(template: str, fallback: str) -> Rule:
    def rule(ins: Instruction) -> str:
        if not ins.operands:
            return fallback
        return template.format(target=operand_name(ins.operands[0]))
    return rule

def _compare_zero(relation: str, fallback: str) -> Rule:
    def rule(ins: Instruction) -> str:
        if len(ins.operands) < 2:
            return fallback
        reg, target = operand_name(ins.operands[0]), operand_name(ins.operands[1])
        return f"if {reg} {relation} 0 jump to {target}"
    return rule

def _fixed(text: str) -> Rule:
    return lambda ins: text

# Condición -> lectura en palabras
CONDITION_PHRASE: Dict[Condition, str] = {
    Condition.EQ: "equal",
    Condition.NE: "not equal",
    Condition.CS: "carry set (unsigned higher or same)",
    Condition.CC: "carry clear (unsigned lower)",
    Condition.MI: "negative",
    Condition.PL: "positive or zero",
    Condition.VS: "overflow",
    Condition.VC: "no overflow",
    Condition.HI: "unsigned higher",
    Condition.LS: "unsigned lower or same",
    Condition.GE: "signed greater or equal",
    Condition.LT: "signed less than",
    Condition.GT: "signed greater than",
    Condition.LE: "signed less or equal",
}

RULES: Dict[InstructionKind, Rule] = {
    K.ADD: _triad("+", "addition"),
    K.SUB: _triad("-", "subtraction"),
    K.MUL: _triad("×", "multiplication"),
    K.AND: _triad("&", "bitwise AND"),
    K.ORR: _triad("|", "bitwise OR"),
    K.EOR: _triad("^", "bitwise XOR"),
    K.LSL: _triad("<<", "logical shift left"),
    K.LSR: _triad(">>", "logical shift right"),
    K.ASR: _triad(">>", "arithmetic shift right", " (arithmetic)"),

    K.LDR:  _load("load", "load from memory"),
    K.LDRB: _load("load byte", "load byte from memory"),
    K.LDRH: _load("load half-word", "load half-word from memory"),
    K.LDP:  _load("load", "load register pair from memory", pair=True),
    K.STR:  _store("store", "store to memory"),
    K.STRB: _store("store byte", "store byte to memory"),
    K.STRH: _store("store half-word", "store half-word to memory"),
    K.STP:  _store("store", "store register pair to memory", pair=True),

    K.MOV:  _move("move"),
    K.MOVZ: _move("move immediate, clearing other bits", " (other bits cleared)"),
    K.MOVK: _move("move immediate, keeping other bits", " (other bits preserved)"),

    K.CMP: _compare,

    K.B:   _branch("jump to {target}", "unconditional jump"),
    K.BL:  _branch("call {target} (return address saved in LR)", "call function"),
    K.BLR: _branch("call the address in register {target} (return address saved in LR)",
                   "call function through register"),
    K.BR:  _branch("jump to the address in register {target}", "jump to register address"),
    K.RET: _fixed("return from subroutine"),

    K.CBZ:  _compare_zero("==", "branch if zero"),
    K.CBNZ: _compare_zero("!=", "branch if not zero"),

    K.NOP: _fixed("no operation"),
}

for _kind, _cond in KIND_CONDITION.items():
    RULES[_kind] = _fixed(f"branch if {CONDITION_PHRASE[_cond]} ({_cond.flags})")

def interpret(ins: Instruction) -> str:
    """Frase que describe el efecto de la instrucción. Nunca falla."""
    rule = RULES.get(ins.kind)
    if rule is None:
        return f"{ins.kind.name} instruction"
    return rule(ins)
