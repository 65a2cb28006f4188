from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Awaitable, Callable, Sequence

from .models.generation import FailureReason, GenerationFailure, GenerationResult
from .models.onboarding import clean
from .models.section import DraftDocument, GeneratedSection, SectionCatalog, SectionDefinition, SectionWarning
from .normalizer import settle_section

logger = logging.getLogger(__name__)

SectionGenerator = Callable[[str, SectionDefinition], Awaitable[GenerationResult]]


def new_section_id() -> str:
    return uuid.uuid4().hex[:12]


class DocumentAssembler:
    def __init__(
        self,
        *,
        id_factory: Callable[[], str] = new_section_id,
        document_version: int = 1,
    ) -> None:
        self._id_factory = id_factory
        self._document_version = document_version

    async def assemble(
        self,
        selected: Sequence[str],
        catalog: SectionCatalog,
        generate: SectionGenerator,
    ) -> tuple[DraftDocument, list[SectionWarning]]:
        """Generate every selected section concurrently and join them in selection order."""

        async def build(section_type: str) -> tuple[GeneratedSection, SectionWarning | None]:
            definition = catalog[section_type]
            result = await self._contained(section_type, definition, generate)
            data, warning = settle_section(section_type, definition.default_data, result)
            if warning is not None:
                logger.warning(
                    "Section fell back to default data",
                    extra={"section_type": section_type, "reason": result.failure.reason.value},
                )
            section = GeneratedSection(
                id=self._id_factory(),
                type=section_type,
                version=definition.version,
                data=data,
                title=clean(definition.title) or None,
            )
            return section, warning

        built = await asyncio.gather(*(build(section_type) for section_type in selected))
        sections = [section for section, _ in built]
        warnings = [warning for _, warning in built if warning is not None]
        return DraftDocument(version=self._document_version, sections=sections), warnings

    async def _contained(
        self,
        section_type: str,
        definition: SectionDefinition,
        generate: SectionGenerator,
    ) -> GenerationResult:
        try:
            return await generate(section_type, definition)
        except Exception as exc:
            logger.error(
                "Section generation raised",
                exc_info=True,
                extra={"section_type": section_type, "error": str(exc)},
            )
            return GenerationResult(
                section_type=section_type,
                failure=GenerationFailure(FailureReason.unexpected_error, detail=str(exc) or type(exc).__name__),
            )


__all__ = ["DocumentAssembler", "SectionGenerator", "new_section_id"]
