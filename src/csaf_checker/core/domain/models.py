"""Modelos del reporte (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los exportadores (JSON/HTML) serializan estos modelos directamente.

Nota:
- Estos modelos describen *qué* se encontró, no *cómo* se sondeó.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Requirement(BaseModel):
    """Resultado de exactamente un check contra un dominio.

    `messages` vacío significa que el dominio cumple; nunca que el check no
    se ejecutó.
    """

    model_config = ConfigDict(frozen=True)

    num: int = Field(
        ...,
        ge=0,
        description="Stable requirement number, unique across the checks of a run.",
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Human readable name of the rule being checked.",
    )
    messages: list[str] = Field(
        default_factory=list,
        description="Findings, in the order the check produced them.",
    )

    @property
    def compliant(self) -> bool:
        return not self.messages


class Domain(BaseModel):
    """Todos los resultados de requisitos de un dominio verificado."""

    name: str = Field(
        ...,
        min_length=1,
        description="Hostname or base URL as given by the caller.",
    )
    requirements: list[Requirement] = Field(
        default_factory=list,
        description="One requirement per check, in check order.",
    )

    @property
    def compliant(self) -> bool:
        return all(r.compliant for r in self.requirements)


class Report(BaseModel):
    """Resultado raíz de una corrida: una entrada por dominio de entrada."""

    domains: list[Domain] = Field(
        default_factory=list,
        description="Checked domains, in input order.",
    )

    @property
    def has_findings(self) -> bool:
        return any(not d.compliant for d in self.domains)
