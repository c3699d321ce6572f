import pytest
from unittest.mock import AsyncMock

from ktour_mcp.client import TourAPIClient
from ktour_mcp.config import Settings
from ktour_mcp.schemas import AreaCode

AREAS = [
    AreaCode(code="1", name="서울"),
    AreaCode(code="2", name="인천"),
    AreaCode(code="6", name="부산"),
    AreaCode(code="36", name="경상남도"),
    AreaCode(code="39", name="제주도"),
]


@pytest.fixture
def settings():
    return Settings(TOUR_API_KEY="test-key")


@pytest.fixture
def fake_client():
    client = AsyncMock(spec=TourAPIClient)
    client.area_codes.return_value = list(AREAS)
    client.run_query.return_value = []
    return client
