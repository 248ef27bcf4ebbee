from pathlib import Path
from typing import Callable

from fastapi.responses import FileResponse
from starlette.types import Receive, Scope, Send

from smartpdf.core.errors import StreamError
from smartpdf.core.logging import configure_logging
from smartpdf.models import CompressionStats
from smartpdf.utils.file_utils import PDF_MEDIA_TYPE

logger = configure_logging("responses")

RESPONSE_FILENAME = "compressed.pdf"


class CompressedPDFResponse(FileResponse):
    """Send the compressed PDF as a download, then run the request's file cleanup.

    The cleanup runs whether or not the transfer succeeds. A failed transfer is
    logged only, since the response has already started.
    """

    def __init__(self, path: Path, *, stats: CompressionStats, cleanup: Callable[[], None]) -> None:
        super().__init__(
            path,
            media_type=PDF_MEDIA_TYPE,
            filename=RESPONSE_FILENAME,
            headers=stats.as_headers(),
        )
        self.stats = stats
        self._cleanup = cleanup

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await self._send_file(scope, receive, send)
        except StreamError as exc:
            logger.error("Could not send compressed PDF: %s", exc.detail, exc_info=exc.__cause__)
        finally:
            self._cleanup()

    async def _send_file(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except Exception as exc:
            raise StreamError(f"{type(exc).__name__}: {exc}") from exc
