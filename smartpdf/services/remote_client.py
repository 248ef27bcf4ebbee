from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, BinaryIO

from smartpdf.models import CompressionLevel


@dataclass(frozen=True)
class AssetRef:
    """Opaque reference to a file stored by the remote service."""

    value: Any


@dataclass(frozen=True)
class JobHandle:
    """Opaque location used to poll an in-flight job."""

    location: str


class CompressionClient(ABC):
    """Remote PDF compression service.

    Implementations raise the errors from ``smartpdf.core.errors``:
    ``CredentialError`` from :meth:`authenticate`, ``RemoteServiceError`` for
    transport or quota failures and ``RemoteJobError`` when a job fails.
    """

    @abstractmethod
    async def authenticate(self) -> None: ...

    @abstractmethod
    async def upload_asset(self, stream: BinaryIO, media_type: str) -> AssetRef: ...

    @abstractmethod
    async def submit_job(self, asset: AssetRef, level: CompressionLevel) -> JobHandle: ...

    @abstractmethod
    async def await_result(self, handle: JobHandle) -> AssetRef: ...

    @abstractmethod
    async def download_result(self, asset: AssetRef) -> BinaryIO: ...
