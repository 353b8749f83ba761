"""FastAPI application serving the paw-check panel."""

from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import HTMLResponse

from . import api
from .presenter import render_html

app = FastAPI(title="Paw-Check")

FORCE_REFRESH_URL = "/?parameter=force_refresh"


@app.get("/", response_class=HTMLResponse)
def serve_panel(parameter: Optional[str] = Query(default=None)):
    """Render the panel as a self-refreshing HTML page."""
    result = api.run_check(parameter)
    return HTMLResponse(render_html(result.panel, refresh_url=FORCE_REFRESH_URL))


# API routes
app.include_router(api.router, prefix="/v1")
