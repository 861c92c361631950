"""
Pytest configuration and fixtures for HN Probe tests.
"""

import json
import os
import tempfile
from typing import Any, Dict, List, Optional

import pytest

from hn_probe.checks import SuiteSettings
from hn_probe.events import CheckEvent
from hn_probe.hn import HackerNewsAPI, HNContext, RawResponse

BASE_URL = "https://hacker-news.firebaseio.com/v0"


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="run checks against the real Hacker News API",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--live"):
        return
    skip_live = pytest.mark.skip(reason="needs --live to reach the real API")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def item_url(item_id: int) -> str:
    return f"{BASE_URL}/item/{item_id}.json"


class MockApiClient:
    """Mock API client for testing."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        """Initialize with predefined responses."""
        self.responses = responses or {}
        self.raw: Dict[str, RawResponse] = {}
        self.get_calls: List[str] = []

    def get(self, url: str) -> RawResponse:
        """Return the predefined response for the URL, or a JSON null body."""
        self.get_calls.append(url)
        if url in self.raw:
            return self.raw[url]
        return RawResponse(200, json.dumps(self.responses.get(url)))

    def set_items(self, *items: Dict[str, Any]) -> None:
        for item in items:
            self.responses[item_url(item["id"])] = item

    def set_list(self, name: str, ids: List[int]) -> None:
        self.responses[f"{BASE_URL}/{name}.json"] = ids


class MockSink:
    """Mock event sink for testing."""

    def __init__(self):
        self.events: List[CheckEvent] = []

    def emit(self, event: CheckEvent) -> None:
        self.events.append(event)


@pytest.fixture
def temp_dir() -> str:
    """Create a temporary directory for files written by a test."""
    with tempfile.TemporaryDirectory() as path:
        yield path


@pytest.fixture
def temp_config_path() -> str:
    """Create a temporary config file path for testing."""
    fd, path = tempfile.mkstemp(suffix=".toml")
    os.close(fd)
    yield path
    os.unlink(path)


@pytest.fixture
def mock_api_client() -> MockApiClient:
    """Return a mock API client."""
    return MockApiClient()


@pytest.fixture
def mock_sink() -> MockSink:
    """Return a mock event sink."""
    return MockSink()


@pytest.fixture
def mock_context(mock_api_client: MockApiClient) -> HNContext:
    """Return a mock HN context."""
    return HNContext(api_client=mock_api_client, base_url=BASE_URL)


@pytest.fixture
def api(mock_context: HNContext) -> HackerNewsAPI:
    """Return an API client wired to the mock context."""
    return HackerNewsAPI(mock_context)


@pytest.fixture
def settings() -> SuiteSettings:
    """Return settings small enough for hand-built fixtures."""
    return SuiteSettings(min_top_stories=3, sample_size=3, score_sample_size=3)


@pytest.fixture
def sample_item() -> Dict[str, Any]:
    """Return a sample HN item (story)."""
    return {
        "id": 12345,
        "type": "story",
        "title": "Test Story",
        "by": "testuser",
        "time": 1617235200,
        "url": "https://example.com/story",
        "score": 120,
        "descendants": 4,
        "kids": [1001, 1002, 1003],
    }


@pytest.fixture
def sample_comments() -> List[Dict[str, Any]]:
    """Return a list of sample comments."""
    return [
        {
            "id": 1001,
            "type": "comment",
            "parent": 12345,
            "by": "user1",
            "time": 1617235300,
            "text": "Comment 1",
            "kids": [1004],
        },
        {
            "id": 1002,
            "type": "comment",
            "parent": 12345,
            "by": "user2",
            "time": 1617235400,
            "text": "Comment 2",
        },
        {
            "id": 1003,
            "type": "comment",
            "parent": 12345,
            "by": "user3",
            "time": 1617235500,
            "text": "Comment 3",
        },
    ]


@pytest.fixture
def front_page(mock_api_client: MockApiClient, sample_item, sample_comments) -> MockApiClient:
    """
    Populate the mock client with a small, healthy front page:
    three top stories, distinct new/best lists and a max item id.
    """
    now = 1_700_000_000
    stories = [
        dict(sample_item, time=now - 3600),
        {
            "id": 12346,
            "type": "story",
            "title": "Ask HN: Test?",
            "by": "asker",
            "time": now - 7200,
            "text": "What do you think?",
            "score": 80,
        },
        {
            "id": 12347,
            "type": "story",
            "title": "Dead story",
            "by": "spammer",
            "time": now - 9000,
            "url": "https://spam.example.com",
            "score": 1,
            "dead": True,
        },
    ]
    mock_api_client.set_items(*stories, *sample_comments)
    mock_api_client.set_list("topstories", [s["id"] for s in stories])
    mock_api_client.set_list("newstories", [12347, 12346, 12345])
    mock_api_client.set_list("beststories", [12345, 12347, 12346])
    mock_api_client.responses[f"{BASE_URL}/maxitem.json"] = 40_000_000
    return mock_api_client
