'''
jerarquía de excepciones (parseo, mnemónico, registro, operando, búsqueda)
'''

from __future__ import annotations


class DumpError(Exception):
    """Base de todos los errores del analizador de listados."""


class ParseError(DumpError, ValueError):
    """Texto mal formado: literal inmediato inválido o línea vacía."""

    def __str__(self) -> str:
        return f"Error de parseo: {self.args[0] if self.args else ''}"


class InvalidInstruction(DumpError, ValueError):
    """Mnemónico que no está en la tabla de instrucciones."""

    def __init__(self, mnemonic: str):
        super().__init__(mnemonic)
        self.mnemonic = mnemonic

    def __str__(self) -> str:
        return f"Instrucción inválida: {self.mnemonic}"


class InvalidRegister(DumpError, ValueError):
    """Token que no nombra ningún registro de propósito general."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Registro inválido: {self.name}"


class InvalidOperand(DumpError, ValueError):
    """Operando que no encaja en ninguna de las gramáticas conocidas."""

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"Operando inválido: '{self.text}'"


class NotFound(DumpError, LookupError):
    """Función (o frontera de función) ausente del listado."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Función no encontrada: {self.name}"
