"""
pytest configuration and fixtures for quote service tests
"""

import random
import shutil
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from utils.config_manager import QuoteServiceConfig
from quote_service import QuoteService, quote_service as global_quote_service
from tests.factories import QuoteFileFactory
from tests.mocks import MockQuoteOrigin, InMemoryQuoteSource


TEST_BASE_URL = "https://quotes.example.test/quotes"

TEST_GAMES = (
    ("halo-ce", "halo-ce.json"),
    ("halo-2", "halo-2.json"),
    ("halo-3", "halo-3.json"),
    ("halo-reach", "halo-reach.json"),
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def test_service_config():
    """Small registry pointing at a fake origin"""
    return QuoteServiceConfig(base_url=TEST_BASE_URL, request_timeout=5.0, games=TEST_GAMES)


@pytest.fixture
def test_quote_files():
    """Quote file payloads for TEST_GAMES keyed by filename"""
    return QuoteFileFactory.create_quote_files(TEST_GAMES)


@pytest.fixture
def in_memory_source(test_quote_files):
    return InMemoryQuoteSource(dict(test_quote_files))


@pytest.fixture
def service(test_service_config, in_memory_source):
    """QuoteService wired to the in-memory source"""
    return QuoteService(config=test_service_config, source=in_memory_source, rng=random.Random(7))


@pytest.fixture
def registry():
    """Registry of the process-wide service used by the API"""
    return global_quote_service.registry


@pytest.fixture
def origin_files(registry):
    """Quote file payloads for every registered game"""
    return QuoteFileFactory.create_quote_files(registry.entries())


@pytest.fixture
def mock_origin():
    """Mocked static-file origin for the process-wide service"""
    with MockQuoteOrigin(global_quote_service.source.base_url) as origin:
        yield origin


@pytest.fixture
def client():
    """Test client with the application lifespan running"""
    from api.app import app

    with TestClient(app) as test_client:
        yield test_client
