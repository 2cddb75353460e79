"""Pytest configuration and shared fixtures for MetaView tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from metaview.meta.models import Row


@pytest.fixture
def project_root():
    """
    Provide the project root directory.

    This fixture returns the absolute path to the project root,
    which is the parent of the tests/ directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def meta_payload():
    """Provide a realistic third-party payload mixing every group shape."""
    return {
        "Checkout": {"cartButton": "TCM-1001", "payButton": "TCM-1002", "retries": 3},
        "Profile": {"avatar": "TCM-2001", "settings": {"theme": "dark"}},
        "Legacy": "TCM-9999",
        "Batch": [1, 2, 3],
        "Empty": {},
    }


@pytest.fixture
def sample_rows():
    """Provide a handful of rows in display order."""
    return [
        Row(component="header", identifier="TCM-1"),
        Row(component="footer", identifier="TCM-2"),
        Row(component="sidebar", identifier="TCM-3"),
        Row(component="modal", identifier="TCM-4"),
    ]


@pytest.fixture
def mock_response():
    """Build a requests-like response mock."""
    def _build(status_code=200, payload=None, json_error=None):
        resp = Mock()
        resp.status_code = status_code
        resp.ok = 200 <= status_code < 400
        if json_error is not None:
            resp.json.side_effect = json_error
        else:
            resp.json.return_value = payload
        return resp
    return _build
