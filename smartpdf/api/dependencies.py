from fastapi import Depends, Request

from smartpdf.core.config import Settings
from smartpdf.services.adobe_client import AdobeCompressionClient
from smartpdf.services.remote_client import CompressionClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_compression_client(settings: Settings = Depends(get_app_settings)) -> CompressionClient:
    # One client per request; credentials are only checked on first use.
    return AdobeCompressionClient(settings)
