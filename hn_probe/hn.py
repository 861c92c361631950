import json
import logging
from typing import Any, List, NamedTuple, Optional, Protocol, Tuple, Type, TypeVar

import requests
from pydantic import ValidationError

from hn_probe.errors import ProtocolError, TransportError
from hn_probe.models import Comment, Item, Story

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hacker-news.firebaseio.com/v0"

STORY_LISTS = {
    "top": "topstories",
    "new": "newstories",
    "best": "beststories",
}

ItemT = TypeVar("ItemT", bound=Item)


class RawResponse(NamedTuple):
    """Status code and undecoded body of a single GET."""

    status_code: int
    text: str

    def json(self) -> Any:
        return json.loads(self.text)


class ApiClient(Protocol):
    """Protocol defining the interface for an API client."""

    def get(self, url: str) -> RawResponse:
        """Make a GET request to the specified URL."""
        ...


class RequestsClient:
    """Implementation of ApiClient using the requests library."""

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            timeout: Per-request timeout in seconds, None for the transport default
            session: Session to reuse; a new one is created if omitted
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def get(self, url: str) -> RawResponse:
        """Make a GET request to the specified URL."""
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(url, e) from e
        return RawResponse(response.status_code, response.text)

    def close(self) -> None:
        self.session.close()


class HNContext:
    """
    Context object for Hacker News API operations.
    Contains all dependencies needed by the API client.
    """

    def __init__(self, api_client: Optional[ApiClient] = None, base_url: str = DEFAULT_BASE_URL):
        """
        Initialize the Hacker News context.

        Args:
            api_client: Client for making HTTP requests
            base_url: Base URL for the Hacker News API
        """
        self.api_client = api_client or RequestsClient()
        self.base_url = base_url.rstrip("/")

    def close(self) -> None:
        """Release the underlying HTTP client, if it holds anything."""
        close = getattr(self.api_client, "close", None)
        if close is not None:
            close()


class HackerNewsAPI:
    """
    A read-only client for the Hacker News API.

    Every method issues exactly one blocking GET. Nothing is retried or cached.
    """

    def __init__(self, context: Optional[HNContext] = None) -> None:
        """
        Initialize the HackerNews API client.

        Args:
            context: Context object containing dependencies
        """
        self.context = context or HNContext()

    def _url(self, path: str) -> str:
        return f"{self.context.base_url}/{path}.json"

    def _fetch(self, path: str) -> Tuple[RawResponse, Any]:
        """GET a path, require HTTP 200 and return the response with its decoded body."""
        url = self._url(path)
        response = self.context.api_client.get(url)
        if response.status_code != 200:
            raise ProtocolError(url, response.status_code, response.text, "expected HTTP 200")
        try:
            return response, response.json()
        except ValueError as e:
            raise ProtocolError(url, response.status_code, response.text, f"malformed JSON: {e}") from e

    def _get_json(self, path: str) -> Any:
        return self._fetch(path)[1]

    def list_stories(self, kind: str) -> List[int]:
        """
        Retrieve one of the ranked story ID lists.

        Args:
            kind: One of "top", "new" or "best"

        Returns:
            The story IDs in the order the API ranks them
        """
        if kind not in STORY_LISTS:
            raise ValueError(f"unknown story list {kind!r}, expected one of {sorted(STORY_LISTS)}")

        path = STORY_LISTS[kind]
        logger.info("Fetching %s stories", kind)
        response, body = self._fetch(path)
        if not isinstance(body, list) or not all(_is_int(x) for x in body):
            raise ProtocolError(self._url(path), 200, response.text, "expected a JSON array of integers")

        logger.info("Retrieved %d %s stories", len(body), kind)
        return body

    def list_top(self) -> List[int]:
        return self.list_stories("top")

    def list_new(self) -> List[int]:
        return self.list_stories("new")

    def list_best(self) -> List[int]:
        return self.list_stories("best")

    def get_item_response(self, item_id: int) -> RawResponse:
        """Fetch an item without checking its status or decoding its body."""
        logger.info("Fetching item with ID: %s", item_id)
        return self.context.api_client.get(self._url(f"item/{item_id}"))

    def get_item(self, item_id: int) -> Optional[Any]:
        """
        Retrieve an item (story, comment, etc.) from the HackerNews API.

        Args:
            item_id: The ID of the item to retrieve

        Returns:
            The decoded JSON body, or None if the ID does not resolve to an item
        """
        logger.info("Fetching item with ID: %s", item_id)
        return self._get_json(f"item/{item_id}")

    def _get_typed(self, item_id: int, model: Type[ItemT]) -> Optional[ItemT]:
        raw = self.get_item(item_id)
        if not isinstance(raw, dict):
            logger.info("Item %s not found", item_id)
            return None
        try:
            item = model.model_validate(raw)
        except ValidationError as e:
            logger.warning("Item %s could not be read as a %s: %s", item_id, model.__name__, e)
            return None
        logger.info("Retrieved %s", item)
        return item

    def get_story(self, item_id: int) -> Optional[Story]:
        """Fetch an item and read it as a story; None if absent or unreadable."""
        return self._get_typed(item_id, Story)

    def get_comment(self, item_id: int) -> Optional[Comment]:
        """Fetch an item and read it as a comment; None if absent or unreadable."""
        return self._get_typed(item_id, Comment)

    def max_item_id(self) -> int:
        """Return the largest item ID the API has handed out so far."""
        logger.info("Fetching max item ID")
        response, body = self._fetch("maxitem")
        if not _is_int(body):
            raise ProtocolError(self._url("maxitem"), 200, response.text, "expected a JSON integer")
        logger.info("Max item ID: %s", body)
        return body


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
