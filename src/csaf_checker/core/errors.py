"""Errores que abortan una corrida del checker.

Que un dominio incumpla un requisito nunca es una excepción: es un mensaje en
el requisito. Solo las condiciones de abajo detienen la corrida completa.
"""

from __future__ import annotations


class CheckerError(Exception):
    """Clase base de los errores que abortan la corrida."""


class InvalidInputError(CheckerError):
    """La lista de checks o de dominios entregada al processor es inválida."""


class CheckError(CheckerError):
    """Lo lanza el `run` de un check cuando la corrida no puede continuar."""


class KeyringError(CheckerError):
    """El backend OpenPGP falta o no es utilizable."""
