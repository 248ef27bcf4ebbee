from __future__ import annotations

from contextlib import contextmanager
from io import BytesIO
from typing import BinaryIO, Iterator, Optional

from adobe.pdfservices.operation.auth.service_principal_credentials import ServicePrincipalCredentials
from adobe.pdfservices.operation.exception.exceptions import (
    SdkException,
    ServiceApiException,
    ServiceUsageException,
)
from adobe.pdfservices.operation.pdf_services import PDFServices
from adobe.pdfservices.operation.pdf_services_media_type import PDFServicesMediaType
from adobe.pdfservices.operation.pdfjobs.jobs.compress_pdf_job import CompressPDFJob
from adobe.pdfservices.operation.pdfjobs.params.compress_pdf.compress_pdf_params import CompressPDFParams
from adobe.pdfservices.operation.pdfjobs.params.compress_pdf.compression_level import (
    CompressionLevel as AdobeCompressionLevel,
)
from adobe.pdfservices.operation.pdfjobs.result.compress_pdf_result import CompressPDFResult
from fastapi.concurrency import run_in_threadpool

from smartpdf.core.config import Settings, get_settings
from smartpdf.core.errors import CredentialError, RemoteJobError, RemoteServiceError
from smartpdf.core.logging import configure_logging
from smartpdf.models import CompressionLevel
from smartpdf.services.remote_client import AssetRef, CompressionClient, JobHandle

logger = configure_logging("adobe")

_MEDIA_TYPES = {"application/pdf": PDFServicesMediaType.PDF}
_AUTH_STATUS_CODES = {401, 403}


def _status_code(exc: Exception) -> Optional[int]:
    return getattr(exc, "status_code", None)


@contextmanager
def _translate_errors(step: str, *, job_step: bool = False) -> Iterator[None]:
    """Map SDK exceptions onto the service's error taxonomy, most specific first."""
    try:
        yield
    except ServiceUsageException as exc:
        raise RemoteServiceError(f"{step}: usage limit reached: {exc}") from exc
    except ServiceApiException as exc:
        if _status_code(exc) in _AUTH_STATUS_CODES:
            raise CredentialError(f"{step}: credentials rejected: {exc}") from exc
        if job_step:
            raise RemoteJobError(f"{step}: job failed: {exc}") from exc
        raise RemoteServiceError(f"{step}: service error: {exc}") from exc
    except SdkException as exc:
        raise RemoteServiceError(f"{step}: SDK error: {exc}") from exc


class AdobeCompressionClient(CompressionClient):
    """Compression through Adobe PDF Services.

    The SDK blocks while uploading and polling, so every call is pushed to the
    threadpool and the event loop stays free for other requests.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.client_id = settings.pdf_services_client_id
        self.client_secret = settings.pdf_services_client_secret
        self._services: Optional[PDFServices] = None

    @property
    def services(self) -> PDFServices:
        if self._services is None:
            raise CredentialError("authenticate() must be called before using the service")
        return self._services

    async def authenticate(self) -> None:
        if not self.client_id or not self.client_secret:
            raise CredentialError("PDF_SERVICES_CLIENT_ID / PDF_SERVICES_CLIENT_SECRET are not configured")

        try:
            credentials = ServicePrincipalCredentials(
                client_id=self.client_id,
                client_secret=self.client_secret,
            )
            self._services = PDFServices(credentials=credentials)
        except (SdkException, ValueError) as exc:
            raise CredentialError(f"Could not set up PDF Services credentials: {exc}") from exc
        logger.debug("PDF Services client initialised")

    async def upload_asset(self, stream: BinaryIO, media_type: str) -> AssetRef:
        mime_type = _MEDIA_TYPES.get(media_type)
        if mime_type is None:
            raise RemoteServiceError(f"Media type {media_type!r} is not supported by PDF Services")

        services = self.services
        data = await run_in_threadpool(stream.read)
        with _translate_errors("upload"):
            asset = await run_in_threadpool(services.upload, input_stream=data, mime_type=mime_type)
        logger.info("Uploaded %s bytes to PDF Services", len(data))
        return AssetRef(asset)

    async def submit_job(self, asset: AssetRef, level: CompressionLevel) -> JobHandle:
        services = self.services
        params = CompressPDFParams(compression_level=AdobeCompressionLevel[level.value])
        job = CompressPDFJob(input_asset=asset.value, compress_pdf_params=params)
        with _translate_errors("submit"):
            location = await run_in_threadpool(services.submit, job)
        logger.info("Submitted compression job (level=%s)", level.value)
        return JobHandle(location)

    async def await_result(self, handle: JobHandle) -> AssetRef:
        with _translate_errors("poll", job_step=True):
            response = await run_in_threadpool(self.services.get_job_result, handle.location, CompressPDFResult)

        result = response.get_result() if response is not None else None
        asset = result.get_asset() if result is not None else None
        if asset is None:
            raise RemoteJobError("Compression job finished without a result asset")
        return AssetRef(asset)

    async def download_result(self, asset: AssetRef) -> BinaryIO:
        with _translate_errors("download"):
            stream_asset = await run_in_threadpool(self.services.get_content, asset.value)
        return BytesIO(stream_asset.get_input_stream())
