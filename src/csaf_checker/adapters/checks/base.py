"""Base común de los checks concretos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from csaf_checker.core.domain.models import Domain, Requirement

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor

logger = logging.getLogger(__name__)

NO_DIRECTORIES = "No directory based distribution found"


class BaseCheck:
    """Guarda el número de requisito, su descripción y los hallazgos de `run`.

    Las subclases sobrescriben `run`; casi ninguna toca `report`.
    """

    num: int = 0
    description: str = ""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def run(self, processor: Processor, domain: str) -> None:
        pass

    def report(self, processor: Processor, domain: Domain) -> None:
        domain.requirements.append(
            Requirement(num=self.num, description=self.description, messages=list(self.messages))
        )

    def reset(self) -> None:
        self.messages = []

    def add(self, message: str) -> None:
        logger.debug("Requirement %d: %s", self.num, message)
        self.messages.append(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num={self.num})"


class DirectoryCheck(BaseCheck):
    """Base de los checks que recorren las distribuciones por directorio."""

    def run(self, processor: Processor, domain: str) -> None:
        directories = processor.directories(domain)
        if not directories:
            error = processor.provider_metadata(domain).error
            self.add(f"{NO_DIRECTORIES}: {error}" if error else NO_DIRECTORIES)
            return
        for directory in directories:
            self.check_directory(processor, directory)

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        raise NotImplementedError
