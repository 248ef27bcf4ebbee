"""Shared fixtures: isolated settings, a scripted remote client and test PDFs."""

from io import BytesIO
from typing import BinaryIO, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from smartpdf.api.dependencies import get_compression_client
from smartpdf.core.config import Settings
from smartpdf.main import create_app
from smartpdf.models import CompressionLevel
from smartpdf.services.remote_client import AssetRef, CompressionClient, JobHandle


def make_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class FakeCompressionClient(CompressionClient):
    """Records every remote step and can fail any one of them.

    ``result`` maps the uploaded bytes to the bytes handed back as the
    compression result; by default the upload is echoed back unchanged.
    """

    def __init__(
        self,
        *,
        fail_on: Optional[str] = None,
        error: Optional[Exception] = None,
        result: Optional[Callable[[bytes], bytes]] = None,
    ) -> None:
        self.fail_on = fail_on
        self.error = error
        self.result = result or (lambda data: data)
        self.calls: List[str] = []
        self.levels: List[CompressionLevel] = []
        self._jobs: Dict[str, bytes] = {}

    def _step(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name and self.error is not None:
            raise self.error

    async def authenticate(self) -> None:
        self._step("authenticate")

    async def upload_asset(self, stream: BinaryIO, media_type: str) -> AssetRef:
        self._step("upload_asset")
        assert media_type == "application/pdf"
        return AssetRef(stream.read())

    async def submit_job(self, asset: AssetRef, level: CompressionLevel) -> JobHandle:
        self._step("submit_job")
        self.levels.append(level)
        location = f"job-{len(self._jobs)}"
        self._jobs[location] = asset.value
        return JobHandle(location)

    async def await_result(self, handle: JobHandle) -> AssetRef:
        self._step("await_result")
        return AssetRef(self.result(self._jobs[handle.location]))

    async def download_result(self, asset: AssetRef) -> BinaryIO:
        self._step("download_result")
        return BytesIO(asset.value)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf(pages=3)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        temp_dir=tmp_path / "uploads",
        public_dir=tmp_path / "public",
        pdf_services_client_id="test-id",
        pdf_services_client_secret="test-secret",
    )


@pytest.fixture
def fake_client() -> FakeCompressionClient:
    return FakeCompressionClient()


@pytest.fixture
def app(settings, fake_client):
    application = create_app(settings)
    application.dependency_overrides[get_compression_client] = lambda: fake_client
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def temp_files(settings) -> Callable[[], List[str]]:
    def _list() -> List[str]:
        directory = settings.resolved_temp_dir()
        return sorted(p.name for p in directory.iterdir()) if directory.exists() else []

    return _list
