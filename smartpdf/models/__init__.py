from .common import ErrorResponse, HealthResponse
from .compress import CompressionLevel, CompressionStats, reduction_percent

__all__ = [
    "CompressionLevel",
    "CompressionStats",
    "ErrorResponse",
    "HealthResponse",
    "reduction_percent",
]
