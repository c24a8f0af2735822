"""Web routes: landing page and redirect resolution."""

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortly.common.url_builder import build_redirect_url

router = APIRouter()

LANDING_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Shortly</title></head>
<body>
<h1>Shortly - Shorten Your URL</h1>
<p>Use the <code>shortly</code> command to shorten a URL or list your history.</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the landing page. The root path is never redirected."""
    return HTMLResponse(content=LANDING_PAGE)


@router.get("/{path:path}", include_in_schema=False)
async def redirect_to_backend(request: Request, path: str):
    """Forward any other path to the real backend, which resolves short codes."""
    config = request.app.state.config
    target = build_redirect_url(config.redirect_base_url, request.url.path)
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
