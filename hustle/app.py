# app.py
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from hustle.affiliates import get_offers
from hustle.config import APP_TITLE, DEFAULT_MODEL, DEFAULT_TARGET_AMOUNT, LLM_MODELS, MIN_TARGET_AMOUNT
from hustle.errors import HustleGenerationError
from hustle.flows import generate_daily_hustle_ideas, idea_to_display, run_generation
from hustle.models import HustleIdeasInput, Idea, Notice, field_errors
from hustle.prompts.loader import list_available_templates
from hustle.saved_store import SavedIdeaStore

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

# --- Initialize and configure FastAPI ---
app = FastAPI(title=APP_TITLE)

# Mount static folder
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Templates
templates = Jinja2Templates(directory=str(STATIC_DIR / "html"))

_saved_store: Optional[SavedIdeaStore] = None


def get_saved_store() -> SavedIdeaStore:
    """Process-wide saved list; read from local storage on first use."""
    global _saved_store
    if _saved_store is None:
        _saved_store = SavedIdeaStore()
    return _saved_store


def _saved_payload(store: SavedIdeaStore) -> list:
    return [idea_to_display(idea) for idea in store.ideas]


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        return None


# --------------------------------------------------
# Routes
# --------------------------------------------------

@app.get("/")
async def serve_index(request: Request, store: SavedIdeaStore = Depends(get_saved_store)):
    """Serves the generator page with the saved list and offers pre-rendered"""
    return templates.TemplateResponse(request, "index.html", {
        "title": APP_TITLE,
        "saved_ideas": _saved_payload(store),
        "offers": [offer.model_dump() for offer in get_offers()],
        "default_target_amount": DEFAULT_TARGET_AMOUNT,
        "min_target_amount": MIN_TARGET_AMOUNT,
        "current_year": datetime.now().year,
    })


@app.post("/api/flows/generate-daily-hustle-ideas")
async def api_generate_daily_hustle_ideas(request: Request):
    """
    Raw generation entry point.
    Body: {userSkills, targetAmount}. Returns {ideas: [{idea, suggestedWebsites}]}.
    """
    body = await _read_json(request)
    try:
        params = HustleIdeasInput.model_validate(body if isinstance(body, dict) else {})
    except ValidationError as e:
        return JSONResponse({"status": "error", "errors": field_errors(e)}, status_code=422)

    try:
        output = await run_in_threadpool(generate_daily_hustle_ideas, params)
    except HustleGenerationError as e:
        logger.error(f"Generation failed: {e.message}")
        return JSONResponse({"status": "error", "message": e.message}, status_code=502)
    return JSONResponse(output.to_wire())


@app.post("/api/generate-ideas")
async def api_generate_ideas(request: Request):
    """
    Generation for the page: display records, a notice and a featured offer.
    """
    body = await _read_json(request)
    try:
        params = HustleIdeasInput.model_validate(body if isinstance(body, dict) else {})
    except ValidationError as e:
        return JSONResponse({"status": "error", "errors": field_errors(e)}, status_code=422)

    try:
        result = await run_in_threadpool(run_generation, params)
        return JSONResponse(result.to_dict())
    except Exception as e:
        logger.exception("Unexpected error while generating ideas")
        return JSONResponse({"status": "error", "message": str(e)}, status_code=500)


@app.get("/api/saved-ideas")
async def api_get_saved_ideas(store: SavedIdeaStore = Depends(get_saved_store)):
    return JSONResponse({"status": "success", "ideas": _saved_payload(store)})


@app.post("/api/saved-ideas")
async def api_save_idea(idea: Idea, store: SavedIdeaStore = Depends(get_saved_store)):
    """Add an idea to the saved list; saving an id twice changes nothing"""
    saved = store.save(idea)
    if saved:
        preview = idea.text[:30]
        notice = Notice(title="Idea Saved", description=f'"{preview}..." saved successfully.')
    else:
        notice = Notice(title="Already Saved", description="This idea is already in your saved list.")
    return JSONResponse({
        "status": "success",
        "saved": saved,
        "ideas": _saved_payload(store),
        "notice": notice.model_dump(),
    })


@app.delete("/api/saved-ideas/{idea_id}")
async def api_remove_saved_idea(idea_id: str, store: SavedIdeaStore = Depends(get_saved_store)):
    removed = store.remove(idea_id)
    notice = None
    if removed:
        notice = Notice(title="Idea Removed",
                        description="The idea has been removed from your saved list.").model_dump()
    return JSONResponse({
        "status": "success",
        "removed": removed,
        "ideas": _saved_payload(store),
        "notice": notice,
    })


@app.get("/api/affiliate-offers")
async def api_get_affiliate_offers():
    return JSONResponse({
        "status": "success",
        "offers": [offer.model_dump() for offer in get_offers()],
    })


@app.get("/api/models")
async def get_models():
    """Get available LLM models"""
    return JSONResponse({"models": LLM_MODELS, "default": DEFAULT_MODEL})


@app.get("/api/prompt-templates")
async def get_prompt_templates():
    """List bundled prompt templates with their validation warnings"""
    try:
        return JSONResponse({"status": "success", "templates": list_available_templates()})
    except Exception as e:
        return JSONResponse({"status": "error", "message": str(e)}, status_code=500)
