'''
tabla formal de mnemónicos AArch64 (tipo de instrucción, familia, condición)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .errors import InvalidInstruction
from .regs import Condition, SUFFIX_TO_COND

# Familias -> tipos. El orden aquí fija el orden del enum.
FAMILIES: Dict[str, str] = {
    "arithmetic":     "ADD SUB MUL MADD MSUB SDIV UDIV SMULL UMULL NEG ADC SBC",
    "logical":        "AND ORR EOR BIC ORN EON MVN",
    "shift":          "LSL LSR ASR ROR",
    "bitfield":       "UBFM SBFM BFM BFI BFXIL UBFX SBFX UBFIZ SBFIZ EXTR",
    "bit":            "REV REV16 REV32 CLZ CLS RBIT",
    "load":           "LDR LDRB LDRH LDRSB LDRSH LDRSW LDP LDUR LDXR LDAR "
                      "LDXRB LDXRH LDAXRB LDAXRH LDXP",
    "store":          "STR STRB STRH STP STUR STXR STLR STXRB STXRH STLXRB STLXRH STXP",
    "atomic":         "LDADD LDADDAL LDCLR LDEOR LDSET SWP CAS CASAL LDADDH LDADDB "
                      "LDADDLH LDADDLB CASA CASB CASH CASP STADD STADDL STADDB STADDH",
    "branch":         "B BL BR BLR RET",
    "cond_branch":    "BEQ BNE BCS BCC BMI BPL BVS BVC BHI BLS BGE BLT BGT BLE",
    "compare_branch": "CBZ CBNZ TBZ TBNZ",
    "compare":        "CMP CMN TST",
    "move":           "MOV MOVZ MOVK MOVN",
    "system":         "NOP SVC HLT BRK DMB DSB ISB WFE WFI YIELD MRS MSR ERET DRPS",
    "float":          "FADD FSUB FMUL FDIV FMADD FMSUB FNEG FABS FSQRT FCMP FCMPE FCVT "
                      "FCVTZS FCVTZU SCVTF UCVTF FMOV FMLA FMLS FMIN FMAX FMINNM FMAXNM "
                      "FCVTAS FCVTAU FCVTMS FCVTMU FCVTNS FCVTNU FCVTPS FCVTPU "
                      "FRINTA FRINTI FRINTM FRINTN FRINTP FRINTX FRINTZ",
    "simd":           "ADDV SMAXV SMINV UMAXV EXT ZIP1 ZIP2 UZP1 TRN1 TBL TBX LD1 ST1 LD2 ST2 "
                      "UADDLV SADDLV UMINV INS DUP UZP2 TRN2 CNT SQADD UQADD SQSUB UQSUB "
                      "SHL SSHR USHR SXTL UXTL",
    "crypto":         "AESE AESD AESMC AESIMC SHA1C SHA1H SHA1M SHA1P SHA256H SHA256H2 "
                      "SHA256SU0 SHA256SU1 CRC32B CRC32H CRC32W CRC32X CRC32CB",
    "pointer_auth":   "PACIA PACDA AUTIA AUTDA",
    "memory_tag":     "IRG GMI LDG STG",
    "conditional":    "CSEL CSINC CSINV CSNEG CSET CSETM CINC CINV CNEG CCMP CCMN",
    "address":        "ADRP ADR",
}

# Conjunto cerrado de tipos de instrucción
InstructionKind = Enum("InstructionKind", " ".join(FAMILIES.values()))

K = InstructionKind

# Rama condicional -> condición que evalúa
KIND_CONDITION: Dict[InstructionKind, Condition] = {
    K.BEQ: Condition.EQ, K.BNE: Condition.NE,
    K.BCS: Condition.CS, K.BCC: Condition.CC,
    K.BMI: Condition.MI, K.BPL: Condition.PL,
    K.BVS: Condition.VS, K.BVC: Condition.VC,
    K.BHI: Condition.HI, K.BLS: Condition.LS,
    K.BGE: Condition.GE, K.BLT: Condition.LT,
    K.BGT: Condition.GT, K.BLE: Condition.LE,
}
COND_KIND: Dict[Condition, InstructionKind] = {c: k for k, c in KIND_CONDITION.items()}


@dataclass(frozen=True)
class ISpec:
    """Entrada de la tabla de mnemónicos.

    - kind: tipo de instrucción
    - family: grupo ('arithmetic', 'load', 'cond_branch', ...)
    - condition: sólo en ramas condicionales (b.<cond>)
    """
    kind: InstructionKind
    family: str
    condition: Optional[Condition] = None


FAMILY: Dict[InstructionKind, str] = {}
for _family, _names in FAMILIES.items():
    for _name in _names.split():
        FAMILY[K[_name]] = _family

# Tabla mnemónico (minúsculas) -> especificación
SPEC: Dict[str, ISpec] = {}

def _add(mnemonic: str, kind: InstructionKind) -> None:
    SPEC[mnemonic] = ISpec(kind, FAMILY[kind], KIND_CONDITION.get(kind))

for _kind in InstructionKind:
    if FAMILY[_kind] != "cond_branch":
        _add(_kind.name.lower(), _kind)

# b.<cond>: cada grafía del sufijo (cs/hs, cc/lo) es una clave más
for _suffix, _cond in SUFFIX_TO_COND.items():
    if _cond in COND_KIND:
        _add(f"b.{_suffix}", COND_KIND[_cond])

MNEMONICS: Dict[str, InstructionKind] = {m: s.kind for m, s in SPEC.items()}


def spec(mnemonic: str) -> ISpec:
    """Devuelve la especificación de una instrucción por mnemónico exacto (en minúsculas)."""
    if mnemonic not in SPEC:
        raise InvalidInstruction(mnemonic)
    return SPEC[mnemonic]


def lookup(mnemonic: str) -> InstructionKind:
    return spec(mnemonic).kind
