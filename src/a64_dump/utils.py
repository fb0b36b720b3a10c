'''
literales enteros (hex/bin/dec) y formato hexadecimal
'''

from __future__ import annotations
import re

HEX_DIGITS_RE = re.compile(r"^[+-]?[0-9a-fA-F]+$")
BIN_DIGITS_RE = re.compile(r"^[+-]?[01]+$")
DEC_DIGITS_RE = re.compile(r"^[+-]?[0-9]+$")

def is_signed_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [-(2^(n-1)), 2^(n-1)-1] (con signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    lo = -(1 << (n - 1))
    hi = (1 << (n - 1)) - 1
    return lo <= x <= hi

def parse_int_literal(text: str) -> int:
    """Convierte '0x1f', '0b101' o '-12' a entero con signo de 64 bits.

    Lanza ValueError con el detalle de la conversión si el literal está mal
    formado o no cabe en 64 bits.
    """
    t = text.strip()
    if t[:2] in ("0x", "0X"):
        digits, base, pattern, kind = t[2:], 16, HEX_DIGITS_RE, "hexadecimal"
    elif t[:2] in ("0b", "0B"):
        digits, base, pattern, kind = t[2:], 2, BIN_DIGITS_RE, "binario"
    else:
        digits, base, pattern, kind = t, 10, DEC_DIGITS_RE, "decimal"
    if not pattern.match(digits):
        raise ValueError(f"número {kind} inválido: '{text}'")
    value = int(digits, base)
    if not is_signed_nbit(value, 64):
        raise ValueError(f"número {kind} fuera de rango de 64 bits: '{text}'")
    return value

def to_hex(x: int) -> str:
    """Hexadecimal con prefijo 0x, sin relleno ('0x8')."""
    return f"0x{x:x}"

def fmt_imm(x: int) -> str:
    """Inmediatos: hex si son no negativos, decimal con signo si son negativos."""
    return str(x) if x < 0 else to_hex(x)
