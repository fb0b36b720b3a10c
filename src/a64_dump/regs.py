'''
registros de propósito general AArch64, alias fp/lr, códigos de condición
'''

from __future__ import annotations
from enum import Enum
from typing import Dict, Optional

from .errors import InvalidRegister


class Register(Enum):
    """Identidad de registro. El valor es el nombre que se muestra."""
    # 64 bits
    X0 = "X0"; X1 = "X1"; X2 = "X2"; X3 = "X3"; X4 = "X4"
    X5 = "X5"; X6 = "X6"; X7 = "X7"; X8 = "X8"; X9 = "X9"
    X10 = "X10"; X11 = "X11"; X12 = "X12"; X13 = "X13"; X14 = "X14"
    X15 = "X15"; X16 = "X16"; X17 = "X17"; X18 = "X18"; X19 = "X19"
    X20 = "X20"; X21 = "X21"; X22 = "X22"; X23 = "X23"; X24 = "X24"
    X25 = "X25"; X26 = "X26"; X27 = "X27"; X28 = "X28"; X29 = "X29"
    X30 = "X30"
    # 32 bits (mitad baja del Xn con el mismo índice)
    W0 = "W0"; W1 = "W1"; W2 = "W2"; W3 = "W3"; W4 = "W4"
    W5 = "W5"; W6 = "W6"; W7 = "W7"; W8 = "W8"; W9 = "W9"
    W10 = "W10"; W11 = "W11"; W12 = "W12"; W13 = "W13"; W14 = "W14"
    W15 = "W15"; W16 = "W16"; W17 = "W17"; W18 = "W18"; W19 = "W19"
    W20 = "W20"; W21 = "W21"; W22 = "W22"; W23 = "W23"; W24 = "W24"
    W25 = "W25"; W26 = "W26"; W27 = "W27"; W28 = "W28"; W29 = "W29"
    W30 = "W30"
    # especiales
    SP = "SP"
    PC = "PC"
    XZR = "XZR"
    WZR = "WZR"
    # alias de X29 / X30
    FP = "FP"
    LR = "LR"

    @property
    def index(self) -> Optional[int]:
        """Índice 0..30 compartido por Xn/Wn; None para SP, PC y los registros cero."""
        return _INDEX.get(self)

    @property
    def is_64bit(self) -> bool:
        return self.name[0] == "X" or self in (Register.SP, Register.PC, Register.FP, Register.LR)

    def __str__(self) -> str:
        return self.value


_INDEX: Dict[Register, int] = {}
for _n in range(31):
    _INDEX[Register[f"X{_n}"]] = _n
    _INDEX[Register[f"W{_n}"]] = _n
_INDEX[Register.FP] = 29
_INDEX[Register.LR] = 30

# Nombre en minúsculas -> registro canónico. fp/lr resuelven a X29/X30,
# igual que los emite objdump.
NAME_TO_REG: Dict[str, Register] = {}
for _n in range(31):
    NAME_TO_REG[f"x{_n}"] = Register[f"X{_n}"]
    NAME_TO_REG[f"w{_n}"] = Register[f"W{_n}"]
NAME_TO_REG.update({
    "fp": Register.X29, "lr": Register.X30,
    "sp": Register.SP, "pc": Register.PC,
    "xzr": Register.XZR, "wzr": Register.WZR,
})


def parse_register(token: str) -> Register:
    """Devuelve el registro nombrado por token (sin distinguir mayúsculas) o lanza InvalidRegister."""
    reg = NAME_TO_REG.get(token.strip().lower())
    if reg is None:
        raise InvalidRegister(token)
    return reg


def is_reg(token: str) -> bool:
    """Indica si el token representa un registro válido."""
    try:
        parse_register(token)
        return True
    except InvalidRegister:
        return False


class Condition(Enum):
    """Códigos de condición con la prueba de flags que realizan."""
    EQ = "Z=1"
    NE = "Z=0"
    CS = "C=1"
    CC = "C=0"
    MI = "N=1"
    PL = "N=0"
    VS = "V=1"
    VC = "V=0"
    HI = "C=1 and Z=0"
    LS = "C=0 or Z=1"
    GE = "N=V"
    LT = "N!=V"
    GT = "Z=0 and N=V"
    LE = "Z=1 or N!=V"
    AL = "always"

    @property
    def flags(self) -> str:
        return self.value


# Sufijo textual -> condición. Dos grafías para carry: cs/hs y cc/lo.
SUFFIX_TO_COND: Dict[str, Condition] = {
    "eq": Condition.EQ, "ne": Condition.NE,
    "cs": Condition.CS, "hs": Condition.CS,
    "cc": Condition.CC, "lo": Condition.CC,
    "mi": Condition.MI, "pl": Condition.PL,
    "vs": Condition.VS, "vc": Condition.VC,
    "hi": Condition.HI, "ls": Condition.LS,
    "ge": Condition.GE, "lt": Condition.LT,
    "gt": Condition.GT, "le": Condition.LE,
}
