"""
Test configuration and shared fixtures for the kbpages test suite.
Provides an in-memory log database, a mocked SharePoint gateway and the API client.
"""

import logging
import os

# Must be set before kbpages is imported so the log engine is in-memory
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("STRICT_COLUMN_TYPES", "false")

import pytest
from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

from kbpages.app import create_app
from kbpages.core.dependencies import get_gateway
from kbpages.query.builder import QueryCompiler


# ===== LOGGING =====

@pytest.fixture
def package_caplog(caplog):
    """caplog wired to the kbpages logger, which does not propagate to root"""
    logger = logging.getLogger("kbpages")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


# ===== MOCKS =====

@pytest.fixture
def mock_gateway():
    """Mock SharePoint gateway with async methods"""
    gateway = Mock()
    gateway.get_items = AsyncMock(return_value=[])
    gateway.get_filter_data = AsyncMock(return_value=[])
    gateway.get_view_field_names = AsyncMock(return_value=[])
    gateway.get_field = AsyncMock(return_value={})
    gateway.get_list_details = AsyncMock(return_value={})
    gateway.create_list_item = AsyncMock(return_value={})
    gateway.get_by_url = AsyncMock(return_value={})
    return gateway


@pytest.fixture
def compiler() -> QueryCompiler:
    """Compiler pinned to the default column names, independent of the environment"""
    return QueryCompiler(category_field="KnowledgeBaseLabel", article_id_field="Article_x0020_ID")


# ===== API CLIENT =====

@pytest.fixture
def client(mock_gateway):
    """FastAPI test client with the gateway replaced by a mock"""
    app = create_app()
    app.dependency_overrides[get_gateway] = lambda: mock_gateway

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ===== SAMPLE DATA =====

@pytest.fixture
def sample_pages() -> List[Dict[str, Any]]:
    """Raw items as GetItems returns them (odata=verbose, trimmed)"""
    return [
        {
            "Id": 1,
            "Title": "Resetting your password",
            "KnowledgeBaseLabel": "IT",
            "FSObjType": 0,
            "Status": "Published",
            "Modified": "2024-03-05T09:15:00Z",
            "Author": {"Title": "Jane Doe", "Id": 7},
            "Topics": {"results": [{"Label": "Accounts"}, {"Label": "Security"}]},
            "SourceLink": {"Url": "https://contoso.com/pw", "Description": "Password portal"},
            "Region": "EMEA.1001",
        },
        {
            "Id": 2,
            "Title": "VPN setup",
            "KnowledgeBaseLabel": "IT",
            "FSObjType": 0,
            "Status": "Draft",
            "Modified": "2024-03-05T17:40:00Z",
            "Author": {"Title": "John Roe", "Id": 12},
            "Topics": {"results": [{"Label": "Network"}, {"Label": "Security"}]},
            "SourceLink": None,
            "Region": "EMEA.2002",
        },
        {
            "Id": 3,
            "Title": "Expense policy",
            "KnowledgeBaseLabel": "IT",
            "FSObjType": 0,
            "Status": "Published",
            "Modified": "2024-03-06T08:00:00Z",
            "Author": {"Title": "Jane Doe", "Id": 7},
            "Topics": {"results": []},
            "SourceLink": {"Url": "https://contoso.com/pw", "Description": "Same portal"},
            "Region": "APAC.3003",
        },
    ]
