from dataclasses import dataclass
from enum import Enum

from smartpdf.core.errors import InvalidParameterError


class CompressionLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, value: str | None) -> "CompressionLevel":
        """Map the raw form value to a level; an empty value means MEDIUM."""
        if not value:
            return cls.MEDIUM
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameterError(f"Unsupported compression level: {value!r}") from None


def reduction_percent(original_size: int, compressed_size: int) -> float:
    if original_size <= 0:
        return 0.0
    return round((original_size - compressed_size) / original_size * 100, 1)


@dataclass(frozen=True)
class CompressionStats:
    original_size: int
    compressed_size: int

    @property
    def reduction_bytes(self) -> int:
        return self.original_size - self.compressed_size

    @property
    def reduction_percent(self) -> float:
        return reduction_percent(self.original_size, self.compressed_size)

    def as_headers(self) -> dict[str, str]:
        return {
            "X-Original-Size": str(self.original_size),
            "X-Compressed-Size": str(self.compressed_size),
            "X-Size-Reduction": f"{self.reduction_percent:.1f}",
        }
