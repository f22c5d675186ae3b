from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


REQUIRED_FIELDS = ("country_code", "name", "capital")


class Country(BaseModel):
    """
    Country record.

    - country_code: short identifier (e.g., "ua"), ``countryCode`` in XML
    - name: display name (e.g., "Ukraine")
    - capital: capital city
    - description: optional free text

    Nothing is validated on construction; records may be built empty and
    filled in attribute by attribute. Required fields are enforced when the
    record is serialized.
    """

    model_config = ConfigDict(populate_by_name=True)

    country_code: str = Field(default="", alias="countryCode", description="Short country identifier")
    name: str = Field(default="", description="Country name like 'Ukraine'")
    capital: str = Field(default="", description="Capital city")
    description: Optional[str] = Field(default=None, description="Optional free text")

    def missing_required_fields(self) -> List[str]:
        """Return the names of required fields that are empty."""
        return [
            field for field in REQUIRED_FIELDS
            if not (getattr(self, field) or "").strip()
        ]

    @classmethod
    def from_dict(cls, doc: dict | None) -> "Country | None":
        """Build from a plain mapping using either attribute or element names."""
        if not doc:
            return None
        return cls.model_validate(doc)
