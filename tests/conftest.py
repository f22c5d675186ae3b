import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from domain.models.countries import Countries  # noqa: E402
from domain.models.country import Country  # noqa: E402


FIXTURE_XML = ROOT / "data" / "countries.xml"


@pytest.fixture
def fixture_path() -> Path:
    return FIXTURE_XML


@pytest.fixture
def ukraine() -> Country:
    return Country(
        country_code="ua",
        name="Ukraine",
        capital="Brussels",
        description="Tuam veneramur voluntatem tuam ut vitam tuam pro nostra des causa.",
    )


@pytest.fixture
def sample_countries(ukraine) -> Countries:
    return Countries.of(
        ukraine,
        Country(country_code="be", name="Belgium", capital="Brussels", description=""),
        Country(country_code="hr", name="Croatia", capital="Zagreb"),
    )
