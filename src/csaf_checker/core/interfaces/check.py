"""Contrato de los checks.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Cualquier objeto con `num`, `description`, `run` y `report` sirve para el
  processor: los checks son intercambiables y fáciles de simular en tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from csaf_checker.core.domain.models import Domain

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor


@runtime_checkable
class Check(Protocol):
    """Contrato mínimo de un requisito de cumplimiento.

    Reglas de diseño:
    - `run` sondea el dominio y guarda lo encontrado en estado privado. Solo
      lanza `CheckError` cuando toda la corrida debe detenerse; un dominio que
      incumple el requisito se reporta, no se lanza.
    - `report` agrega exactamente un `Requirement` a `domain` y puede llamarse
      varias veces con el mismo resultado.
    """

    num: int
    description: str

    def run(self, processor: Processor, domain: str) -> None:
        """Sondea `domain` y acumula hallazgos."""

        ...

    def report(self, processor: Processor, domain: Domain) -> None:
        """Agrega el `Requirement` de este check a `domain`."""

        ...
