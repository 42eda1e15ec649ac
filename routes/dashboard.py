from pathlib import Path

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from services.dashboard import get_dashboard
from services.formatting import fmt_pct, fmt_price, fmt_timestamp, pct_tone
from services.models import DashboardSnapshot
from utils.settings import get_settings

router = APIRouter()

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["pct"] = fmt_pct
templates.env.filters["price"] = fmt_price
templates.env.filters["tone"] = pct_tone


class MarkdownResponse(PlainTextResponse):
    media_type = "text/markdown"


@router.get("/", response_class=HTMLResponse, summary="Dashboard page", tags=["Dashboard"])
async def dashboard_page(request: Request) -> HTMLResponse:
    """
    Render the news and quote dashboard with its copyable brief.
    """
    settings = get_settings()
    snapshot = await get_dashboard()
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "snapshot": snapshot,
            "updated_at": fmt_timestamp(snapshot.generated_at, settings.display_timezone),
        },
    )


@router.get(
    "/api/dashboard",
    response_model=DashboardSnapshot,
    summary="Dashboard snapshot",
    tags=["Dashboard"],
)
async def dashboard_json(
    refresh: bool = Query(default=False, description="Rebuild the snapshot instead of serving the cached one"),
) -> DashboardSnapshot:
    return await get_dashboard(force=refresh)


@router.get("/api/brief", response_class=MarkdownResponse, summary="Markdown brief", tags=["Dashboard"])
async def dashboard_brief() -> MarkdownResponse:
    snapshot = await get_dashboard()
    return MarkdownResponse(snapshot.brief)
