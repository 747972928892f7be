import logging
import random
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from . import config, gaps, levels, sampler
from .models import (
    AnswerReport,
    CheckRequest,
    GameRound,
    GapsRequest,
    Text,
    TextIn,
    TextWithGaps,
    TimeLimitResponse,
)
from .store import InvalidText, StorageUnavailable, TextNotFound, TextStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_store(request: Request) -> TextStore:
    return request.app.state.store


def get_rng(request: Request) -> sampler.RandomSource:
    return request.app.state.rng


# ---------------------------------------------------------------------------
# Text management
# ---------------------------------------------------------------------------


@router.get("/texts", response_model=list[Text])
def list_texts(store: TextStore = Depends(get_store)):
    return store.list_texts()


@router.get("/texts/{text_id}", response_model=Text)
def get_text(text_id: int, store: TextStore = Depends(get_store)):
    return store.get(text_id)


@router.post("/texts", response_model=Text, status_code=201)
def create_text(body: TextIn, store: TextStore = Depends(get_store)):
    return store.create(body.title, body.content)


@router.put("/texts/{text_id}", response_model=Text)
def update_text(text_id: int, body: TextIn, store: TextStore = Depends(get_store)):
    return store.update(text_id, body.title, body.content)


@router.delete("/texts/{text_id}", status_code=204)
def delete_text(text_id: int, store: TextStore = Depends(get_store)):
    store.delete(text_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------


@router.post("/game/round", response_model=GameRound)
def new_round(
    min_len: int = Query(config.SAMPLE_MIN_LEN, ge=1),
    max_len: int = Query(config.SAMPLE_MAX_LEN, ge=1),
    count: int = Query(config.SAMPLE_COUNT, ge=1),
    text_id: int | None = None,
    store: TextStore = Depends(get_store),
    rng: sampler.RandomSource = Depends(get_rng),
):
    """Pick a text (random unless *text_id* is given) and its memory-level words."""
    texts = [store.get(text_id)] if text_id is not None else store.list_texts()
    return sampler.new_round(texts, min_len, max_len, count, rng)


@router.post("/game/gaps", response_model=TextWithGaps)
def text_with_gaps(body: GapsRequest):
    return gaps.locate(body.text, body.words)


@router.post("/game/check", response_model=AnswerReport)
def check_answers(body: CheckRequest):
    return levels.check_answers(body.gap_positions, body.answers)


@router.get("/game/time-limit", response_model=TimeLimitResponse)
def time_limit(level: int, previous_seconds: int | None = Query(None, ge=0)):
    try:
        seconds = levels.level_time_limit(level, previous_seconds)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return TimeLimitResponse(level=level, seconds=seconds)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


async def _storage_unavailable(request: Request, exc: StorageUnavailable):
    logger.warning("[api] Storage unavailable: %s", exc)
    return JSONResponse(status_code=503, content={"detail": "Text storage unavailable"})


async def _text_not_found(request: Request, exc: TextNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _invalid_text(request: Request, exc: InvalidText):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app(
    store: TextStore | None = None, rng: sampler.RandomSource | None = None
) -> FastAPI:
    """Build the API; the store is opened on startup and closed on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.getLogger("gapgame").setLevel(config.LOG_LEVEL)
        app.state.store = store or TextStore(config.TEXTS_PATH, config.SEED_TEXTS_PATH)
        app.state.rng = rng or random.Random()
        try:
            app.state.store.open()
        except StorageUnavailable as exc:
            # Serve anyway; text endpoints answer 503 until the file is fixed
            logger.warning("[store] Could not open text store (%s).", exc)
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(StorageUnavailable, _storage_unavailable)
    app.add_exception_handler(TextNotFound, _text_not_found)
    app.add_exception_handler(InvalidText, _invalid_text)
    return app


app = create_app()
