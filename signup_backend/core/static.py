"""Admin stylesheet serving with browser caching."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Dict

from fastapi.staticfiles import StaticFiles
from starlette.responses import Response
from starlette.types import Scope

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class CachedStaticFiles(StaticFiles):
    """StaticFiles marking found files as publicly cacheable for ``max_age`` seconds.

    ETag and Last-Modified come from starlette's FileResponse, so revalidation
    after expiry is answered with 304.
    """

    def __init__(self, *args, max_age: int = 3600, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_age = max_age

    def cache_headers(self) -> Dict[str, str]:
        expires = datetime.now(timezone.utc) + timedelta(seconds=self.max_age)
        return {
            "Cache-Control": f"public, max-age={self.max_age}",
            "Expires": format_datetime(expires, usegmt=True),
        }

    async def get_response(self, path: str, scope: Scope) -> Response:
        response = await super().get_response(path, scope)
        if response.status_code in (200, 304):
            response.headers.update(self.cache_headers())
        return response
