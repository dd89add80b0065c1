from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lexi.config import ConfigStore


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / ".lexi" / "config.json")


@pytest.fixture
def make_response():
    """Factory for objects shaped like ``requests.Response``."""

    def _make(status_code: int = 200, payload=None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        if isinstance(payload, Exception):
            response.json.side_effect = payload
        else:
            response.json.return_value = payload
        return response

    return _make
