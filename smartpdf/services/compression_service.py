from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from fastapi.concurrency import run_in_threadpool
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from smartpdf.core.errors import CompressorError, RemoteJobError, UnexpectedCompressionError
from smartpdf.core.logging import configure_logging
from smartpdf.models import CompressionLevel, CompressionStats
from smartpdf.services.remote_client import CompressionClient
from smartpdf.storage.local import RequestFiles
from smartpdf.utils.file_utils import PDF_MEDIA_TYPE, file_size

logger = configure_logging("service")


@dataclass(frozen=True)
class CompressionResult:
    output_path: Path
    stats: CompressionStats


class CompressionService:
    """Runs one upload → submit → poll → download cycle against the remote service."""

    def __init__(self, client: CompressionClient) -> None:
        self.client = client

    async def compress(
        self,
        input_path: Path,
        level: CompressionLevel,
        files: RequestFiles,
    ) -> CompressionResult:
        logger.info("Compressing %s with level %s", input_path.name, level.value)
        try:
            output_path = await self._run(input_path, level, files)
        except CompressorError as exc:
            logger.exception("Compression failed (%s): %s", type(exc).__name__, exc.detail)
            raise
        except Exception as exc:
            logger.exception("Compression failed: unexpected error")
            raise UnexpectedCompressionError(f"{type(exc).__name__}: {exc}") from exc

        stats = CompressionStats(
            original_size=file_size(input_path),
            compressed_size=file_size(output_path),
        )
        logger.info(
            "Compression finished: %s -> %s bytes (%.1f%%)",
            stats.original_size,
            stats.compressed_size,
            stats.reduction_percent,
        )
        return CompressionResult(output_path=output_path, stats=stats)

    async def _run(self, input_path: Path, level: CompressionLevel, files: RequestFiles) -> Path:
        await self.client.authenticate()

        with input_path.open("rb") as stream:
            input_asset = await self.client.upload_asset(stream, PDF_MEDIA_TYPE)

        handle = await self.client.submit_job(input_asset, level)
        result_asset = await self.client.await_result(handle)
        result_stream = await self.client.download_result(result_asset)

        output_path = files.new_path("compressed")
        await run_in_threadpool(_write_result, result_stream, output_path)
        return output_path


def _write_result(stream: BinaryIO, path: Path) -> None:
    with path.open("wb") as buffer:
        shutil.copyfileobj(stream, buffer)
    ensure_readable_pdf(path)


def ensure_readable_pdf(path: Path) -> int:
    """Return the page count, or raise RemoteJobError if the file is not a usable PDF."""
    try:
        reader = PdfReader(str(path))
        return len(reader.pages)
    except (PdfReadError, ValueError, OSError) as exc:
        raise RemoteJobError(f"Compression result is not a readable PDF: {exc}") from exc
