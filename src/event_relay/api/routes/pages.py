"""Landing page and catch-all fallback page."""
from typing import Set

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse
from fastapi.routing import APIRoute

from ...core.config import settings

router = APIRouter(tags=["Pages"], include_in_schema=False)


@router.get("/")
async def index() -> FileResponse:
    return FileResponse(settings.assets_dir / "index.html")


def allowed_methods(request: Request) -> Set[str]:
    """Methods of other routes registered for the requested path."""
    methods: Set[str] = set()
    for route in request.app.router.routes:
        if not isinstance(route, APIRoute) or route.endpoint is fallback:
            continue
        if route.path_regex.match(request.url.path):
            methods.update(route.methods)
    return methods


# Must stay the last route registered on the app.
@router.api_route("/{path:path}", methods=["GET", "HEAD"])
async def fallback(request: Request, path: str) -> FileResponse:
    methods = allowed_methods(request)
    if methods:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers={"Allow": ", ".join(sorted(methods))},
        )
    return FileResponse(settings.assets_dir / "fallback.html")
