"""
Authorization failures raised by the middleware dependencies.

Browsers are redirected (sign-in page or 403 page); API clients get a JSON body
with the matching status code.
"""
from urllib.parse import urlencode
from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from siteadmin.core.config import settings


class Unauthenticated(Exception):
    def __init__(self, return_path: str = "/", message: str = "Not authenticated"):
        super().__init__(message)
        self.return_path = return_path
        self.message = message


class Forbidden(Exception):
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)
        self.message = message


def _wants_html(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "text/html" in accept and "application/json" not in accept


async def unauthenticated_handler(request: Request, exc: Unauthenticated):
    if _wants_html(request):
        query = urlencode({"redirect": exc.return_path})
        return RedirectResponse(url=f"{settings.SIGN_IN_PATH}?{query}", status_code=status.HTTP_302_FOUND)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def forbidden_handler(request: Request, exc: Forbidden):
    if _wants_html(request):
        return RedirectResponse(url=settings.FORBIDDEN_PATH, status_code=status.HTTP_302_FOUND)
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})
