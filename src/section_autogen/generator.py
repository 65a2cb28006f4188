from __future__ import annotations

import asyncio
import logging

import httpx

from .assembler import DocumentAssembler
from .brief import build_page_meta, compose_brief, derive_persona, normalize_language
from .config import AutogenSettings, RetryPolicy, get_settings
from .dictionaries import get_preset, resolve_theme
from .errors import RequestValidationError
from .llm_client import GenerationClient
from .models.autogen import AutogenRequest, AutogenResult
from .models.generation import GenerationResult
from .models.onboarding import OnboardingProfile, clean
from .models.section import SectionDefinition
from .post_processor import PostProcessor
from .prompts import DEFAULT_PROMPT_CONFIG, PromptBuilder
from .retry import RetryOrchestrator, Sleep
from .selector import SectionSelector

logger = logging.getLogger(__name__)


class SiteGenerator:
    """Turns one autogen request into a complete draft document plus warnings."""

    def __init__(
        self,
        *,
        orchestrator: RetryOrchestrator,
        prompt_builder: PromptBuilder | None = None,
        selector: SectionSelector | None = None,
        assembler: DocumentAssembler | None = None,
        post_processor: PostProcessor | None = None,
        default_max_sections: int = 10,
        max_sections_cap: int = 12,
    ) -> None:
        self._orchestrator = orchestrator
        self._prompts = prompt_builder or PromptBuilder()
        self._selector = selector or SectionSelector()
        self._assembler = assembler or DocumentAssembler()
        self._post_processor = post_processor or PostProcessor()
        self._default_max_sections = default_max_sections
        self._max_sections_cap = max_sections_cap

    @classmethod
    def from_settings(
        cls,
        settings: AutogenSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> "SiteGenerator":
        settings = settings or get_settings()
        prompt_builder = PromptBuilder(DEFAULT_PROMPT_CONFIG)
        client = GenerationClient.from_settings(
            settings,
            temperature=prompt_builder.config.temperature,
            max_tokens=prompt_builder.config.max_tokens,
            transport=transport,
        )
        return cls(
            orchestrator=RetryOrchestrator(client, RetryPolicy.from_settings(settings), sleep=sleep),
            prompt_builder=prompt_builder,
            default_max_sections=settings.default_max_sections,
            max_sections_cap=settings.max_sections_cap,
        )

    async def generate(self, request: AutogenRequest) -> AutogenResult:
        language = normalize_language(request.language)
        catalog = dict(request.definitions)
        max_sections = min(
            request.max_sections if request.max_sections is not None else self._default_max_sections,
            self._max_sections_cap,
        )

        logger.info(
            "Autogen request",
            extra={
                "language": language,
                "definitions_count": len(catalog),
                "max_sections": max_sections,
                "template_id": request.template_id,
                "theme_key": request.theme_key,
                "forced_sections_count": len(request.forced_sections or ()),
            },
        )

        if not catalog:
            raise RequestValidationError("Missing definitions")

        onboarding = request.onboarding if request.onboarding and request.onboarding.is_active else None
        brief = compose_brief(onboarding, request.desc, language=language)
        if not brief:
            raise RequestValidationError("Missing desc/onboarding")

        persona = derive_persona(request.persona, onboarding)
        template_id = clean(request.template_id) or (onboarding.field("template_id") if onboarding else "") or None
        preset = get_preset(template_id)

        selected = self._selector.select(
            brief,
            catalog,
            max_sections,
            forced=request.forced_sections,
            preset_sections=preset.sections if preset else None,
        )
        logger.info(
            "Sections picked",
            extra={"template_id": template_id, "picked_count": len(selected), "picked": selected},
        )
        if not selected:
            available = list(catalog)
            raise RequestValidationError(
                "No matching sections found",
                context={
                    "templateId": template_id,
                    "themeKey": request.theme_key,
                    "availableCount": len(available),
                    "sampleAvailable": available[:30],
                },
            )

        system_prompt = self._prompts.build_system_prompt(language)

        async def generate_section(section_type: str, definition: SectionDefinition) -> GenerationResult:
            user_prompt = self._prompts.build_user_prompt(
                section_type=section_type,
                default_data=definition.default_data,
                brief=brief,
                persona=persona,
                onboarding=onboarding,
                language=language,
            )
            return await self._orchestrator.run(
                section_type=section_type,
                system=system_prompt,
                user=user_prompt,
            )

        document, warnings = await self._assembler.assemble(selected, catalog, generate_section)
        document = self._post_processor.process(
            document,
            website_goal=_website_goal(onboarding),
            language=language,
        )

        logger.info(
            "Autogen done",
            extra={"sections_count": len(document.sections), "warnings_count": len(warnings)},
        )

        return AutogenResult(
            document=document,
            warnings=warnings,
            theme=resolve_theme(request.theme_key),
            meta=build_page_meta(onboarding, language),
            language=language,
            brief=brief,
            persona=persona,
            onboarding=onboarding,
            template_id=template_id,
            theme_key=request.theme_key,
            selected=selected,
            version=request.version,
        )


def _website_goal(onboarding: OnboardingProfile | None) -> str | None:
    if onboarding is None:
        return None
    return onboarding.field("website_goal") or None


__all__ = ["SiteGenerator"]
