from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .errors import RequestValidationError
from .generator import SiteGenerator
from .logging_config import set_request_id
from .models.autogen import AutogenRequest
from .models.section import GeneratedSection, SectionWarning
from .page_store import PageStore

logger = logging.getLogger(__name__)


class AutogenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    page_id: str = Field(serialization_alias="pageId")
    sections: list[GeneratedSection]
    warnings: list[SectionWarning]
    theme: dict[str, Any]


def create_app(generator: SiteGenerator, page_store: PageStore) -> FastAPI:
    app = FastAPI(title="Section Autogen API", version="0.1.0")

    @app.middleware("http")
    async def assign_request_id(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        set_request_id(request_id)
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Autogen request rejected", extra={"error": exc.message, "debug": exc.context})
        return JSONResponse(exc.to_payload(), status_code=400)

    @app.exception_handler(BodyValidationError)
    async def handle_body_error(request: Request, exc: BodyValidationError) -> JSONResponse:
        errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
        return JSONResponse({"error": "Invalid JSON", "debug": {"errors": errors}}, status_code=400)

    @app.post("/v1/projects/{project_id}/autogen")
    async def autogen(project_id: str, body: AutogenRequest) -> JSONResponse:
        result = await generator.generate(body)
        page = await asyncio.to_thread(page_store.save_draft, project_id, result)
        logger.info(
            "Draft saved",
            extra={"project_id": project_id, "page_id": page.id, "sections_count": len(result.sections)},
        )
        response = AutogenResponse(
            page_id=page.id,
            sections=list(result.sections),
            warnings=list(result.warnings),
            theme=dict(result.theme),
        )
        return JSONResponse(response.model_dump(by_alias=True, mode="json"))

    @app.get("/health")
    async def healthcheck() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return app


__all__ = ["create_app", "AutogenResponse"]
