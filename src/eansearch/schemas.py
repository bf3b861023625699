"""Pydantic schemas for ean-search.org API data.

The API transmits every field as a string, including numeric ones, so the
schemas accept the wire names (``categoryId``) and convert numeric strings
on the way in.
"""

from enum import IntEnum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Language(IntEnum):
    """Result language codes understood by the API."""

    ENGLISH = 1
    DANISH = 2
    GERMAN = 3
    SPANISH = 4
    FINNISH = 5
    FRENCH = 6
    ITALIAN = 8
    DUTCH = 10
    NORWEGIAN = 11
    POLISH = 12
    PORTUGUESE = 13
    SWEDISH = 15
    CZECH = 16
    HUNGARIAN = 17
    ANY = 99  # No language filter


LanguageCode = Union[Language, int]


# ============================================================================
# Product Schemas
# ============================================================================


class Product(BaseModel):
    """A product record returned by lookups and searches.

    Lookups usually carry a Google product category as well; search results
    do not, in which case ``google_category_id`` stays ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ean: str = Field(..., description="Barcode (EAN/UPC/ISBN-13)")
    name: str = Field(..., description="Product name")
    category_id: int = Field(..., alias="categoryId")
    category_name: str = Field(..., alias="categoryName")
    issuing_country: str = Field(..., alias="issuingCountry", description="Two-letter country code")
    google_category_id: Optional[int] = Field(None, alias="googleCategoryId")

    @field_validator("google_category_id", mode="before")
    @classmethod
    def lenient_google_category(cls, v) -> Optional[int]:
        """Drop values that are not numeric instead of rejecting the product."""
        if v is None:
            return None
        try:
            return int(str(v).strip())
        except ValueError:
            return None

    @property
    def has_google_category(self) -> bool:
        return self.google_category_id is not None


ProductList = list[Product]
