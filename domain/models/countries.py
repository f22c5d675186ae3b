from __future__ import annotations

from typing import Iterator, List

from pydantic import BaseModel, Field

from domain.models.country import Country


class Countries(BaseModel):
    """Ordered collection of countries; list order is document order."""

    country: List[Country] = Field(default_factory=list)

    @classmethod
    def of(cls, *countries: Country) -> "Countries":
        return cls(country=list(countries))

    def append(self, country: Country) -> None:
        self.country.append(country)

    def __iter__(self) -> Iterator[Country]:  # type: ignore[override]
        return iter(self.country)

    def __len__(self) -> int:
        return len(self.country)

    def __getitem__(self, index: int) -> Country:
        return self.country[index]
