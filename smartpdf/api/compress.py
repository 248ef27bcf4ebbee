from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool

from smartpdf.api.dependencies import get_app_settings, get_compression_client
from smartpdf.api.responses import CompressedPDFResponse
from smartpdf.core.config import Settings
from smartpdf.core.logging import configure_logging
from smartpdf.models import CompressionLevel, ErrorResponse
from smartpdf.services.compression_service import CompressionService
from smartpdf.services.remote_client import CompressionClient
from smartpdf.storage.local import RequestFiles
from smartpdf.utils.file_utils import ensure_pdf

router = APIRouter(prefix="/api", tags=["PDF Compression"])

logger = configure_logging("compress")


@router.post(
    "/compress",
    summary="Compress an uploaded PDF and return the result as a download",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Compressed PDF"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def compress_pdf(
    pdf: Optional[UploadFile] = File(None),
    compression_level: Optional[str] = Form(None, alias="compressionLevel"),
    settings: Settings = Depends(get_app_settings),
    client: CompressionClient = Depends(get_compression_client),
) -> CompressedPDFResponse:
    level = CompressionLevel.parse(compression_level)
    declared_size = ensure_pdf(pdf, settings.max_upload_bytes)
    logger.info("Received %s (%s bytes), level %s", pdf.filename, declared_size, level.value)

    with RequestFiles(settings.resolved_temp_dir()) as files:
        input_path = await run_in_threadpool(files.save_upload, pdf)
        result = await CompressionService(client).compress(input_path, level, files)
        return CompressedPDFResponse(result.output_path, stats=result.stats, cleanup=files.detach())
