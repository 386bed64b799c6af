from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from services.readings import ReadingService, build_default_service


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_service() -> ReadingService:
    return build_default_service()


router = APIRouter(include_in_schema=False)


@router.get("/", name="dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    service: ReadingService = Depends(get_service),
) -> HTMLResponse:
    # Reads the store directly so the dashboard does not pay the list burn.
    readings, count = service.store.list()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "readings": list(reversed(readings)),
            "count": count,
            "capacity": service.store.capacity,
        },
    )
