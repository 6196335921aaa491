"""REST API over the tagging core.

Routes only translate HTTP to repository calls; the error taxonomy is mapped
to status codes by the exception handlers registered in ``create_app``.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from clipmark.analysis import AnalysisSummary, build_summary, filter_tags_by_category
from clipmark.api.schemas import (
    CategoryPayload,
    ErrorResponse,
    HealthResponse,
    PlayerPayload,
    TagPayload,
)
from clipmark.config import Settings, load_settings
from clipmark.errors import (
    DuplicateNameError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from clipmark.export import ExportRow, build_export_rows, rows_to_csv
from clipmark.models import Category, Player, Tag
from clipmark.persistence import MemoryRepository, Repository, create_repository

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "tags-export.csv"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _deleted_or_404(deleted: bool, entity: str) -> Response:
    if not deleted:
        return JSONResponse(status_code=404, content={"detail": f"{entity} not found"})
    return Response(status_code=204)


def create_app(repository: Repository | None = None, settings: Settings | None = None) -> FastAPI:
    if repository is None:
        repository = create_repository(settings or load_settings())
    app = FastAPI(title="clipmark tagging API")
    app.state.repository = repository
    storage_label = "memory" if isinstance(repository, MemoryRepository) else "sqlite"

    @app.exception_handler(RequestValidationError)
    async def _malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = "; ".join(str(error.get("msg", "invalid value")) for error in exc.errors())
        return JSONResponse(status_code=400, content={"detail": f"Malformed request: {messages}"})

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, exc)

    @app.exception_handler(DuplicateNameError)
    async def _duplicate_name(request: Request, exc: DuplicateNameError) -> JSONResponse:
        return _error(409, exc)

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, exc)

    @app.exception_handler(StorageUnavailableError)
    async def _storage_unavailable(request: Request, exc: StorageUnavailableError) -> JSONResponse:
        logger.warning("Storage unavailable for %s %s: %s", request.method, request.url.path, exc)
        return _error(503, exc)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", storage=storage_label)

    # Categories

    @app.get("/api/categories", response_model=List[Category], responses=_ERROR_RESPONSES)
    async def list_categories() -> List[Category]:
        return repository.list_categories()

    @app.post("/api/categories", response_model=Category, status_code=201, responses=_ERROR_RESPONSES)
    async def create_category(payload: CategoryPayload) -> Category:
        return repository.create_category(payload.name)

    @app.put("/api/categories/{category_id}", response_model=Category, responses=_ERROR_RESPONSES)
    async def update_category(category_id: str, payload: CategoryPayload) -> Category:
        return repository.update_category(category_id, payload.to_fields())

    @app.delete("/api/categories/{category_id}", status_code=204, responses=_ERROR_RESPONSES)
    async def delete_category(category_id: str) -> Response:
        return _deleted_or_404(repository.delete_category(category_id), "Category")

    # Players

    @app.get("/api/players", response_model=List[Player], responses=_ERROR_RESPONSES)
    async def list_players() -> List[Player]:
        return repository.list_players()

    @app.post("/api/players", response_model=Player, status_code=201, responses=_ERROR_RESPONSES)
    async def create_player(payload: PlayerPayload) -> Player:
        return repository.create_player(payload.name, payload.number)

    @app.put("/api/players/{player_id}", response_model=Player, responses=_ERROR_RESPONSES)
    async def update_player(player_id: str, payload: PlayerPayload) -> Player:
        return repository.update_player(player_id, payload.to_fields())

    @app.delete("/api/players/{player_id}", status_code=204, responses=_ERROR_RESPONSES)
    async def delete_player(player_id: str) -> Response:
        return _deleted_or_404(repository.delete_player(player_id), "Player")

    # Tags

    @app.get("/api/tags", response_model=List[Tag], responses=_ERROR_RESPONSES)
    async def list_tags(category_id: str | None = Query(None, alias="categoryId")) -> List[Tag]:
        return filter_tags_by_category(repository.list_tags(), category_id)

    @app.get("/api/tags/{tag_id}", response_model=Tag, responses=_ERROR_RESPONSES)
    async def get_tag(tag_id: str) -> Tag:
        tag = repository.get_tag(tag_id)
        if tag is None:
            raise NotFoundError(f"Tag {tag_id} not found")
        return tag

    @app.post("/api/tags", response_model=Tag, status_code=201, responses=_ERROR_RESPONSES)
    async def create_tag(payload: TagPayload) -> Tag:
        return repository.create_tag(payload.to_fields())

    @app.put("/api/tags/{tag_id}", response_model=Tag, responses=_ERROR_RESPONSES)
    async def update_tag(tag_id: str, payload: TagPayload) -> Tag:
        return repository.update_tag(tag_id, payload.to_fields())

    @app.delete("/api/tags/{tag_id}", status_code=204, responses=_ERROR_RESPONSES)
    async def delete_tag(tag_id: str) -> Response:
        return _deleted_or_404(repository.delete_tag(tag_id), "Tag")

    # Export and analysis

    @app.get("/api/export", response_model=List[ExportRow], responses=_ERROR_RESPONSES)
    async def export_rows() -> List[ExportRow]:
        return build_export_rows(repository)

    @app.get("/api/export/csv", responses=_ERROR_RESPONSES)
    async def export_csv() -> Response:
        csv_text = rows_to_csv(build_export_rows(repository))
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
        )

    @app.get("/api/analysis", response_model=AnalysisSummary, responses=_ERROR_RESPONSES)
    async def analysis() -> AnalysisSummary:
        return build_summary(repository)

    return app


__all__ = ["create_app"]
