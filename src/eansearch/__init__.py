"""Python client for the ean-search.org barcode database.

Provides barcode/ISBN lookup, product search and checksum validation.
"""

from .client import (
    ApiResult,
    EANSearchClient,
    EANSearchError,
    EANSearchNotFoundError,
    EANSearchParseError,
    EANSearchRateLimitError,
    EANSearchTransportError,
    FailureKind,
    decode_barcode_image,
)
from .schemas import Language, Product, ProductList

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "EANSearchClient",
    "EANSearchError",
    "EANSearchNotFoundError",
    "EANSearchParseError",
    "EANSearchRateLimitError",
    "EANSearchTransportError",
    "FailureKind",
    "Language",
    "Product",
    "ProductList",
    "decode_barcode_image",
]
