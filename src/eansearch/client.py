"""ean-search.org API client for barcode and ISBN lookup.

ean-search.org provides a product database keyed by barcode:
- Barcode (EAN/UPC) and ISBN lookup
- Product name, category and barcode prefix search
- Checksum verification
- Issuing country lookup
- Barcode images

An API token is required. Every public operation performs one HTTPS GET
request and returns the operation's "absent" value (None, False or "") when
the call fails for any reason. Use ``execute`` to see why a call failed.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

import requests
from pydantic import ValidationError

from .encoding import build_query, urlencode
from .schemas import Language, LanguageCode, Product

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryParams = list[tuple[str, Any]]


class EANSearchError(Exception):
    """Base exception for ean-search.org API errors."""

    pass


class EANSearchTransportError(EANSearchError):
    """Raised when the request itself fails (DNS, connect, TLS, HTTP status)."""

    pass


class EANSearchRateLimitError(EANSearchTransportError):
    """Raised when rate limited by ean-search.org."""

    pass


class EANSearchParseError(EANSearchError):
    """Raised when the response body is not the expected JSON shape."""

    pass


class EANSearchNotFoundError(EANSearchError):
    """Raised when a well-formed response reports no match."""

    pass


class FailureKind(str, Enum):
    """Why a call produced no value."""

    TRANSPORT = "transport"
    PARSE = "parse"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of a single API call: a value or a typed failure."""

    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    error: Optional[EANSearchError] = None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: EANSearchError) -> "ApiResult[T]":
        if isinstance(error, EANSearchTransportError):
            kind = FailureKind.TRANSPORT
        elif isinstance(error, EANSearchNotFoundError):
            kind = FailureKind.NOT_FOUND
        else:
            kind = FailureKind.PARSE
        return cls(failure=kind, error=error)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default if the call failed."""
        return self.value if self.ok else default


# ============================================================================
# Response Parsers
# ============================================================================


def _first_element(data: Any) -> dict:
    """Return element 0 of a single-element array response."""
    if not isinstance(data, list):
        raise EANSearchParseError(f"Expected a JSON array, got {type(data).__name__}")
    if not data:
        raise EANSearchNotFoundError("Empty response")

    element = data[0]
    if not isinstance(element, dict):
        raise EANSearchParseError("Array element is not an object")
    if "error" in element:
        raise EANSearchNotFoundError(str(element["error"]))
    return element


def _to_product(entry: Any) -> Product:
    try:
        return Product.model_validate(entry)
    except ValidationError as e:
        raise EANSearchParseError(f"Invalid product: {e.error_count()} field error(s)") from e


def parse_product(data: Any) -> Product:
    """Parse a lookup response (``[{...product...}]``)."""
    return _to_product(_first_element(data))


def parse_product_list(data: Any) -> list[Product]:
    """Parse a search response (``{"productlist": [...]}``).

    A single malformed entry fails the whole list.
    """
    if not isinstance(data, dict):
        raise EANSearchParseError(f"Expected a JSON object, got {type(data).__name__}")

    entries = data.get("productlist")
    if not isinstance(entries, list):
        if "error" in data:
            raise EANSearchNotFoundError(str(data["error"]))
        raise EANSearchParseError("Missing productlist array")

    return [_to_product(entry) for entry in entries]


def scalar_field(name: str) -> Callable[[Any], str]:
    """Build a parser extracting one string field from ``[{name: ...}]``."""

    def parse(data: Any) -> str:
        value = _first_element(data).get(name)
        if not isinstance(value, str):
            raise EANSearchParseError(f"Missing field: {name}")
        return value

    return parse


def decode_barcode_image(payload: str) -> bytes:
    """Decode the base64 payload of ``barcode_image`` into PNG bytes.

    Returns b"" if the payload is empty or not valid base64.
    """
    if not payload:
        return b""
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return b""


# ============================================================================
# Client
# ============================================================================


class EANSearchClient:
    """Client for the ean-search.org API."""

    BASE_URL = "https://api.ean-search.org/api"

    def __init__(self, token: str, timeout: int = 10, base_url: Optional[str] = None):
        """Initialize client.

        Args:
            token: API access token
            timeout: Request timeout in seconds
            base_url: Override the API endpoint (tests, proxies)
        """
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {timeout}")

        self.token = token
        self.timeout = timeout
        self.base_url = base_url or self.BASE_URL
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": "eansearch-python/0.1.0"
        })

    def _url(self, query: str) -> str:
        return f"{self.base_url}?{query}&token={urlencode(self.token)}&format=json"

    def _mask(self, text: str) -> str:
        """Hide the token in text bound for logs or error messages."""
        if not self.token:
            return text
        return text.replace(urlencode(self.token), "***").replace(self.token, "***")

    def _get(self, query: str) -> Any:
        """Make GET request with error handling, return decoded JSON."""
        url = self._url(query)
        logger.debug("GET %s", self._mask(url))
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise EANSearchTransportError("Request timed out")
        except requests.exceptions.HTTPError as e:
            if e.response.status_code == 429:
                raise EANSearchRateLimitError("Rate limited by ean-search.org")
            raise EANSearchTransportError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise EANSearchTransportError(self._mask(f"Request failed: {e}"))
        except UnicodeError as e:
            raise EANSearchParseError(f"Cannot encode request: {e}")

        try:
            return response.json()
        except ValueError as e:
            raise EANSearchParseError(f"Malformed JSON: {e}")

    def execute(self, params: QueryParams, parser: Callable[[Any], T]) -> ApiResult[T]:
        """Perform one API call and parse the response.

        Args:
            params: Encoded query pairs, starting with ("op", <operation>)
            parser: Turns the decoded JSON into the result value

        Returns:
            ApiResult holding the parsed value or the failure cause
        """
        operation = params[0][1] if params else "?"
        try:
            data = self._get(build_query(params))
            value = parser(data)
        except EANSearchError as e:
            logger.warning("%s failed: %s", operation, e)
            return ApiResult.fail(e)
        return ApiResult.success(value)

    # ========================================================================
    # Lookup Operations
    # ========================================================================

    def barcode_lookup(self, ean: str, language: LanguageCode = Language.ENGLISH) -> Optional[Product]:
        """Look up a product by EAN/UPC barcode.

        Args:
            ean: Barcode to look up
            language: Preferred language of the product name

        Returns:
            Product if found, None otherwise
        """
        params = [("op", "barcode-lookup"), ("ean", urlencode(ean)), ("language", language)]
        return self.execute(params, parse_product).unwrap_or(None)

    def isbn_lookup(self, isbn: str) -> Optional[Product]:
        """Look up a book by its 10-digit ISBN.

        Returns:
            Product if found, None otherwise
        """
        params = [("op", "barcode-lookup"), ("isbn", urlencode(isbn))]
        return self.execute(params, parse_product).unwrap_or(None)

    def verify_checksum(self, ean: str) -> bool:
        """Ask the service whether the barcode's check digit is valid.

        See ``eansearch.checksum`` for an offline equivalent.
        """
        params = [("op", "verify-checksum"), ("ean", urlencode(ean))]
        valid = self.execute(params, scalar_field("valid")).unwrap_or("0")
        return valid == "1"

    def issuing_country_lookup(self, ean: str) -> str:
        """Look up the country that issued a barcode.

        Returns:
            Country code, or "" on failure
        """
        params = [("op", "issuing-country"), ("ean", urlencode(ean))]
        return self.execute(params, scalar_field("issuingCountry")).unwrap_or("")

    def barcode_image(self, ean: str, width: int = 102, height: int = 50) -> str:
        """Fetch a PNG rendering of the barcode.

        Returns:
            Base64 encoded PNG, or "" on failure
        """
        params = [
            ("op", "barcode-image"),
            ("ean", urlencode(ean)),
            ("width", width),
            ("height", height),
        ]
        return self.execute(params, scalar_field("barcode")).unwrap_or("")

    # ========================================================================
    # Search Operations
    # ========================================================================

    def product_search(
        self,
        name: str,
        language: LanguageCode = Language.ANY,
        page: int = 0,
    ) -> Optional[list[Product]]:
        """Search products by exact name words.

        Args:
            name: Search terms
            language: Restrict results to one language
            page: Result page, 0-based

        Returns:
            List of products (possibly empty), None if the call failed
        """
        params = [
            ("op", "product-search"),
            ("name", urlencode(name)),
            ("language", language),
            ("page", page),
        ]
        return self.execute(params, parse_product_list).unwrap_or(None)

    def similar_product_search(
        self,
        name: str,
        language: LanguageCode = Language.ANY,
        page: int = 1,
    ) -> Optional[list[Product]]:
        """Search products with names similar to the given one.

        Unlike the other searches, pages start at 1.
        """
        params = [
            ("op", "similar-product-search"),
            ("name", urlencode(name)),
            ("language", language),
            ("page", page),
        ]
        return self.execute(params, parse_product_list).unwrap_or(None)

    def category_search(
        self,
        category: int,
        name: str,
        language: LanguageCode = Language.ANY,
        page: int = 0,
    ) -> Optional[list[Product]]:
        """Search products by name within one category.

        Args:
            category: Category id
            name: Search terms
            language: Restrict results to one language
            page: Result page, 0-based
        """
        params = [
            ("op", "category-search"),
            ("category", category),
            ("name", urlencode(name)),
            ("language", language),
            ("page", page),
        ]
        return self.execute(params, parse_product_list).unwrap_or(None)

    def barcode_prefix_search(
        self,
        prefix: str,
        language: LanguageCode = Language.ENGLISH,
        page: int = 0,
    ) -> Optional[list[Product]]:
        """List products whose barcode starts with prefix."""
        params = [
            ("op", "barcode-prefix-search"),
            ("prefix", urlencode(prefix)),
            ("language", language),
            ("page", page),
        ]
        return self.execute(params, parse_product_list).unwrap_or(None)
