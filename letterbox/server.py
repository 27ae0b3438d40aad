import logging

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from letterbox.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("letterbox")


def _solve_response(sides: list[str], words: list[str], strategy: str, word_limit: int | None, timer) -> dict:
    from letterbox.puzzle import parse_puzzle
    from letterbox.settings import search_options
    from letterbox.solver import solve as solve_puzzle

    options = search_options(settings)
    if word_limit is not None:
        options.word_limit = word_limit

    with timer.stage("parse"):
        puzzle = parse_puzzle(sides)

    with timer.stage("solve"):
        solutions = solve_puzzle(words, puzzle, strategy, options)

    returned = solutions[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else solutions
    logger.info("Found %d solutions (returning %d)", len(solutions), len(returned))
    return {
        "sides": puzzle.sides,
        "solutions": returned,
        "solution_count": len(solutions),
        "processing_time": timer.total_ms,
        "stage_timings": timer.summary(),
    }


def create_app(words: list[str] | None = None) -> FastAPI:
    from contextlib import asynccontextmanager

    state = {"words": words}

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if state["words"] is None:
            from letterbox.sources import fetch_words, load_words
            if settings.DICTIONARY_PATH.exists():
                logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
                state["words"] = load_words(settings.DICTIONARY_PATH, settings.MIN_WORD_LENGTH)
            else:
                logger.info("No local dictionary, fetching %s", settings.WORDLIST_URL)
                state["words"] = await fetch_words(settings.WORDLIST_URL, settings.MIN_WORD_LENGTH, settings.FETCH_TIMEOUT)
        logger.info("Word list ready (%d words)", len(state["words"]))
        yield

    application = FastAPI(title="Letter Boxed Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {"status": "ok", "words_loaded": len(state["words"] or [])}

    @application.get("/solve/{sides}")
    async def solve(sides: str, strategy: str | None = None, word_limit: int | None = None):
        from letterbox.metrics import StageTimer
        from letterbox.puzzle import PuzzleError, parse_puzzle_path

        if not state["words"]:
            raise HTTPException(503, "Word list not loaded")
        try:
            puzzle = parse_puzzle_path(sides)
            body = _solve_response(puzzle.sides, state["words"], strategy or settings.STRATEGY, word_limit, StageTimer())
        except (PuzzleError, ValueError) as e:
            raise HTTPException(400, str(e))
        return JSONResponse(body)

    @application.get("/today")
    async def today(strategy: str | None = None, word_limit: int | None = None):
        from letterbox.metrics import StageTimer
        from letterbox.puzzle import PuzzleError
        from letterbox.sources import fetch_live_puzzle

        timer = StageTimer()
        try:
            with timer.stage("fetch"):
                live = await fetch_live_puzzle(settings.PUZZLE_URL, settings.FETCH_TIMEOUT)
        except (PuzzleError, httpx.HTTPError) as e:
            raise HTTPException(502, f"Could not load live puzzle: {e}")
        try:
            body = _solve_response(live.sides, live.words, strategy or settings.STRATEGY, word_limit, timer)
        except (PuzzleError, ValueError) as e:
            raise HTTPException(400, str(e))
        return JSONResponse(body)

    @application.get("/api/settings")
    async def api_get_settings():
        from letterbox.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from letterbox.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()
