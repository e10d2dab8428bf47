"""Public question page."""

import html
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from fragekasten.config import settings

router = APIRouter()

_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "static" / "index.html"


@lru_cache(maxsize=1)
def render_index_page() -> str:
    """Fill the page template from settings. Settings are fixed after startup."""
    replacements = {
        "[TEMPLATE:PAGE_TITLE]": html.escape(settings.page_title),
        "[TEMPLATE:PAGE_OWNER_NAME]": html.escape(settings.page_owner_name),
        "[TEMPLATE:PAGE_DESCRIPTION]": settings.page_description,
        "[TEMPLATE:PLACEHOLDER_QUESTION]": html.escape(settings.page_question_placeholder),
        "[TEMPLATE:QUESTION_MIN_LENGTH]": str(settings.page_question_min_length),
        "[TEMPLATE:QUESTION_MAX_LENGTH]": str(settings.page_question_max_length),
    }
    page = _TEMPLATE_PATH.read_text(encoding="utf-8")
    for placeholder, value in replacements.items():
        page = page.replace(placeholder, value)
    return page


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
@router.get("/index.html", response_class=HTMLResponse, include_in_schema=False)
async def serve_index() -> HTMLResponse:
    return HTMLResponse(render_index_page())
