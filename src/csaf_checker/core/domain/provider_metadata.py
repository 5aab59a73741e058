"""Modelo de un documento CSAF `provider-metadata.json`.

Idea:
- Las reglas de validación viven en el modelo; el check solo convierte las
  entradas de `ValidationError` en hallazgos.
- Los campos desconocidos se ignoran para que documentos más nuevos validen.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Publisher(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: Literal["coordinator", "discoverer", "other", "translator", "user", "vendor"]
    name: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)

    contact_details: str | None = None
    issuing_authority: str | None = None


class PublicOpenPGPKey(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str = Field(..., min_length=1)
    fingerprint: str | None = Field(default=None, pattern=r"^[0-9a-fA-F]{40,}$")


class Distribution(BaseModel):
    model_config = ConfigDict(extra="ignore")

    directory_url: str | None = None
    rolie: dict | None = None


class ProviderMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    canonical_url: str
    distributions: list[Distribution] = Field(default_factory=list)
    last_updated: datetime
    list_on_csaf_aggregators: bool = Field(..., alias="list_on_CSAF_aggregators")
    metadata_version: Literal["2.0"]
    mirror_on_csaf_aggregators: bool = Field(..., alias="mirror_on_CSAF_aggregators")
    public_openpgp_keys: list[PublicOpenPGPKey] = Field(default_factory=list)
    publisher: Publisher
    role: Literal["csaf_publisher", "csaf_provider", "csaf_trusted_provider"]

    @field_validator("canonical_url")
    @classmethod
    def _canonical_url_shape(cls, value: str) -> str:
        if not value.startswith("https://"):
            raise ValueError("must be an https URL")
        if not value.endswith("/provider-metadata.json"):
            raise ValueError("must end with /provider-metadata.json")
        return value
