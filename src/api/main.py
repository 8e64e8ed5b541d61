import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from src.api.routes.embed import router as embed_router
from src.api.routes.search import router as search_router
from src.config import settings
from src.errors import InvalidInputError, PodcastSearchError, UnauthenticatedError
from src.ingestion.embeddings import create_embedding_service
from src.ingestion.storage import get_supabase_client
from src.pipeline_config import EmbeddingConfig

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Providers are built once here and injected into routes; a missing
    # credential leaves the provider unset and its routes answer 503.
    try:
        app.state.embedder = create_embedding_service(EmbeddingConfig.from_settings(settings))
        logger.info(
            "Embedding provider %s ready (dimension %d)",
            settings.embedding_provider,
            app.state.embedder.get_dimension(),
        )
    except ValueError as exc:
        logger.warning("Embedding provider unavailable: %s", exc)
        app.state.embedder = None

    if settings.supabase_url and settings.supabase_key:
        app.state.supabase = get_supabase_client()
    else:
        logger.warning("SUPABASE_URL/SUPABASE_KEY not set; auth and storage unavailable")
        app.state.supabase = None
    yield


app = FastAPI(
    title="Podcast Search API",
    description="Semantic search over timestamped podcast transcripts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_origin_regex=r"https://.*\.vercel\.app|http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_BY_ERROR: dict[type[PodcastSearchError], int] = {
    UnauthenticatedError: 401,
    InvalidInputError: 400,
}


@app.exception_handler(PodcastSearchError)
async def service_error_handler(request: Request, exc: PodcastSearchError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 500)
    if status == 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {detail}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


app.include_router(embed_router)
app.include_router(search_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy", "embedding_provider": settings.embedding_provider}


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run("src.api.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
