import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import Settings, load_env
from .errors import DataUnavailable, NoData
from .monitoring import setup_logging
from .sampler import CycleSampler, SeenSetSampler, build_sampler
from .schemas import ErrorResponse, ReloadResponse, WordResponse
from .vocabulary import VocabularySource

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "Vocabulary service is running"


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _dispense(request: Request):
    sampler: CycleSampler = request.app.state.sampler
    try:
        draw = await sampler.next()
    except NoData as e:
        logger.error(f"No vocabulary to serve: {e}")
        return _error(500, "No data found", str(e))
    except Exception:
        logger.exception("Unexpected error while dispensing a word")
        return _error(500, "Internal server error", "Failed to fetch word")
    return WordResponse(remaining_unique=draw.remaining, data=draw.entry)


def create_app(
    settings: Optional[Settings] = None,
    source: Optional[VocabularySource] = None,
    sampler: Optional[CycleSampler] = None,
) -> FastAPI:
    """Build the app. The dataset is loaded here; a bad dataset leaves the
    service up with an empty vocabulary."""
    if settings is None:
        env_path = load_env()
        settings = Settings.from_env()
        setup_logging()
        logger.info(f"Loaded .env from: {env_path or '[none]'}; store={settings.store_kind}")

    if source is None:
        source = VocabularySource(settings.vocab_file)
        try:
            source.reload()
        except DataUnavailable as e:
            logger.error(f"Error loading vocabulary, serving empty: {e}")

    if sampler is None:
        sampler = build_sampler(settings, source)

    app = FastAPI(title="WordCycle Vocabulary Service")
    app.state.settings = settings
    app.state.source = source
    app.state.sampler = sampler

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        return LIVENESS_TEXT

    @app.get("/get", response_model=WordResponse, responses={500: {"model": ErrorResponse}})
    async def get_word(request: Request):
        return await _dispense(request)

    # route by the sampler actually built; build_sampler may fall back to memory
    if isinstance(sampler, SeenSetSampler):
        @app.get("/", response_class=PlainTextResponse)
        def root():
            return LIVENESS_TEXT
    else:
        @app.get("/", response_model=WordResponse, responses={500: {"model": ErrorResponse}})
        async def root(request: Request):
            return await _dispense(request)

    @app.post("/reload", response_model=ReloadResponse, responses={500: {"model": ErrorResponse}})
    def reload_vocabulary(request: Request):
        try:
            count = request.app.state.source.reload()
        except DataUnavailable as e:
            logger.error(f"Reload failed, keeping current vocabulary: {e}")
            return _error(500, "Data unavailable", str(e))
        request.app.state.sampler.reset()
        return ReloadResponse(count=count)

    return app


app = create_app()
