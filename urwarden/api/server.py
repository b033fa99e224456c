from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status

from urwarden.api.admin import router as admin_router
from urwarden.config import Settings
from urwarden.exceptions import URLError
from urwarden.pipelines.url_pipeline import URLPipeline
from urwarden.schemas.api_schemas import (
    BatchCheckRequest,
    BatchCheckResponse,
    BatchError,
    CheckRequest,
)
from urwarden.schemas.result_schemas import Result
from urwarden.services.blocklist_service import BlocklistIndex
from urwarden.utils.logging_config import StructuredLogger
from urwarden.version import __version__

logger = StructuredLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    blocklist: Optional[BlocklistIndex] = None,
) -> FastAPI:
    """
    Build the API app.

    The blocklist is loaded here when not supplied; a missing file gives an
    empty blocklist.
    """
    settings = settings or Settings()
    if blocklist is None:
        blocklist = BlocklistIndex(settings.resolved_blocklist_path)
        blocklist.load()

    app = FastAPI(
        title="urwarden API",
        version=__version__,
        description="Heuristic URL classification",
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )
    app.state.settings = settings
    app.state.blocklist = blocklist
    app.state.pipeline = URLPipeline(blocklist, settings)

    # Security headers middleware
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    app.include_router(admin_router)

    @app.get("/health")
    def health():
        """Health check endpoint - no auth required."""
        return {"status": "ok"}

    @app.get("/status")
    def status_info(request: Request):
        """API status and configuration info."""
        state = request.app.state
        return {
            "status": "ok",
            "version": __version__,
            "environment": state.settings.environment,
            "blocklist_size": state.blocklist.size(),
            "thresholds": {
                "malicious": state.settings.malicious_threshold,
                "suspicious": state.settings.suspicious_threshold,
            },
        }

    @app.post("/check", response_model=Result)
    def check(payload: CheckRequest, request: Request):
        try:
            return request.app.state.pipeline.analyze(payload.url)
        except URLError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    @app.post("/check/batch", response_model=BatchCheckResponse)
    def check_batch(payload: BatchCheckRequest, request: Request):
        outcomes = request.app.state.pipeline.analyze_batch(payload.urls)
        results = [o.result for o in outcomes if o.ok]
        errors = [BatchError(input_url=o.input_url, error=str(o.error)) for o in outcomes if not o.ok]
        logger.info("Batch checked", urls=len(outcomes), errors=len(errors))
        return BatchCheckResponse(results=results, errors=errors)

    return app


if __name__ == "__main__":
    import uvicorn

    from urwarden.utils.logging_config import init_logging

    _settings = Settings()
    init_logging(_settings)
    uvicorn.run(create_app(_settings), host="127.0.0.1", port=8000)
