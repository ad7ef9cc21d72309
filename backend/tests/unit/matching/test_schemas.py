"""Unit tests for mapping request schemas"""

import pytest

from matching import schemas
from matching.normalizer import normalize_line


class TestMappingRequestConversion:
    """Test the test-endpoint payload to request line conversion"""

    @pytest.mark.parametrize("size", [25.0, 1e-05, 1e20])
    def test_size_is_kept_as_millimeters(self, size):
        request = schemas.TestMappingRequest(description="corrugated pipe", size_od_mm=size)

        line = normalize_line(request.to_request_line())

        assert line.normalized.size_mm == size

    def test_missing_size_stays_unset(self):
        request = schemas.TestMappingRequest(description="corrugated pipe", material="fr pp")

        line = normalize_line(request.to_request_line())

        assert line.normalized.size_mm is None
        assert line.normalized.material == "FRPP"
