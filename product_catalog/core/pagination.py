"""
Cursor-based pagination over DynamoDB Scan/Query responses.

PageIterator wraps a single page-fetching callable and produces a lazy,
restartable sequence of ProductPage objects: every ``iter()`` starts again
from the first page, and nothing is fetched until a page is requested.

Page tokens handed to API callers are the store's LastEvaluatedKey encoded as
URL-safe base64 JSON, so clients never see DynamoDB key structure.
"""

import base64
import json
import logging
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Tuple

from ..exceptions import ValidationError
from ..models import Product, ProductPage
from ..utils import from_dynamodb_types

logger = logging.getLogger(__name__)

# (limit, exclusive_start_key) -> (items, last_evaluated_key)
PageFetcher = Callable[[Optional[int], Optional[Dict[str, Any]]], Tuple[list, Optional[Dict[str, Any]]]]


def encode_page_token(last_key: Optional[Dict[str, Any]]) -> Optional[str]:
    """Encode a LastEvaluatedKey as an opaque page token."""
    if not last_key:
        return None
    raw = json.dumps(from_dynamodb_types(last_key), sort_keys=True, separators=(',', ':'))
    return base64.urlsafe_b64encode(raw.encode('utf-8')).decode('ascii')


def decode_page_token(
    token: Optional[str],
    key_fields: Sequence[str] = (Product.Meta.partition_key,)
) -> Optional[Dict[str, Any]]:
    """Decode a page token back into an ExclusiveStartKey.

    Args:
        token: Token from a previous page, or None for the first page
        key_fields: Attributes the decoded key must hold, each a string

    Raises:
        ValidationError: If the token was not produced by encode_page_token
            for a key of this shape
    """
    if token is None or token == "":
        return None
    if not isinstance(token, str):
        raise ValidationError(
            f"Invalid page token: expected a string, got {type(token).__name__}",
            {'nextToken': 'not a string'}
        )
    try:
        raw = base64.urlsafe_b64decode(token.encode('ascii'))
        key = json.loads(raw)
    except (ValueError, UnicodeError) as e:
        raise ValidationError(f"Invalid page token: {token!r}", {'nextToken': 'malformed'}, e) from e
    if (
        not isinstance(key, dict)
        or set(key) != set(key_fields)
        or not all(isinstance(value, str) and value for value in key.values())
    ):
        raise ValidationError(f"Invalid page token: {token!r}", {'nextToken': 'malformed'})
    return key


class PageIterator:
    """
    Lazy, restartable sequence of product pages.

    Example:
        pages = store.scan_all(page_size=50)
        for page in pages:
            handle(page.items)

        products = list(pages.items())  # starts over from the first page
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        page_size: Optional[int] = None,
        start_key: Optional[Dict[str, Any]] = None
    ):
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.start_key = start_key

    def __iter__(self) -> Iterator[ProductPage]:
        last_key = self.start_key
        page_number = 0
        while True:
            raw_items, last_key = self._fetch_page(self.page_size, last_key)
            page_number += 1
            logger.debug(f"Fetched page {page_number} with {len(raw_items)} items")
            yield ProductPage(
                items=[Product.from_dynamodb_item(item) for item in raw_items],
                next_token=encode_page_token(last_key),
            )
            if not last_key:
                return

    def items(self) -> Iterator[Product]:
        """Iterate over every product across all pages."""
        for page in self:
            yield from page.items

    def first_page(self) -> ProductPage:
        """Fetch only the first page."""
        return next(iter(self))
