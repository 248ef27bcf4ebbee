import pytest

from smartpdf.core.errors import InvalidParameterError
from smartpdf.models import CompressionLevel, CompressionStats, reduction_percent


class TestReductionPercent:
    def test_sixty_percent(self):
        assert reduction_percent(1_000_000, 400_000) == 60.0

    def test_zero_original_size(self):
        assert reduction_percent(0, 0) == 0.0
        assert reduction_percent(0, 1234) == 0.0

    def test_rounded_to_one_decimal(self):
        assert reduction_percent(3, 2) == 33.3

    def test_growth_is_negative(self):
        assert reduction_percent(100, 150) == -50.0


class TestCompressionStats:
    def test_headers(self):
        stats = CompressionStats(original_size=1_000_000, compressed_size=400_000)

        assert stats.reduction_bytes == 600_000
        assert stats.as_headers() == {
            "X-Original-Size": "1000000",
            "X-Compressed-Size": "400000",
            "X-Size-Reduction": "60.0",
        }


class TestCompressionLevel:
    @pytest.mark.parametrize("raw", ["LOW", "MEDIUM", "HIGH"])
    def test_accepts_known_levels(self, raw):
        assert CompressionLevel.parse(raw).value == raw

    @pytest.mark.parametrize("raw", [None, ""])
    def test_defaults_to_medium(self, raw):
        assert CompressionLevel.parse(raw) is CompressionLevel.MEDIUM

    @pytest.mark.parametrize("raw", ["low", "EXTREME", " HIGH"])
    def test_rejects_anything_else(self, raw):
        with pytest.raises(InvalidParameterError):
            CompressionLevel.parse(raw)
