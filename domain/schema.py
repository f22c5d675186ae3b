# domain/schema.py
"""
Element mapping for the countries XML document.

    <countries>
        <country>
            <countryCode>ua</countryCode>
            <name>Ukraine</name>
            <capital>Kyiv</capital>
            <description>...</description>   (optional)
        </country>
        ...
    </countries>

The table below is the single source of element names and output order.
It is checked once, at import time, against the Country model.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Tuple

from domain.models.country import REQUIRED_FIELDS, Country
from middleware.errors import ConfigurationError

ROOT_ELEMENT = "countries"
ITEM_ELEMENT = "country"

_XML_NAME_RE = re.compile(r"^[A-Za-z_][\w.\-]*$")


@dataclass(frozen=True)
class FieldMapping:
    attribute: str   # Country attribute
    element: str     # XML child element of <country>
    required: bool = False


COUNTRY_FIELDS: Tuple[FieldMapping, ...] = (
    FieldMapping("country_code", "countryCode", required=True),
    FieldMapping("name", "name", required=True),
    FieldMapping("capital", "capital", required=True),
    FieldMapping("description", "description"),
)


def validate_mapping(fields: Tuple[FieldMapping, ...] = COUNTRY_FIELDS) -> Dict[str, FieldMapping]:
    """Check the mapping table and return it indexed by element name."""
    by_element: Dict[str, FieldMapping] = {}
    model_fields = Country.model_fields

    for mapping in fields:
        if mapping.attribute not in model_fields:
            raise ConfigurationError(f"Country has no attribute '{mapping.attribute}'")
        if not _XML_NAME_RE.match(mapping.element) or mapping.element.lower().startswith("xml"):
            raise ConfigurationError(f"'{mapping.element}' is not a usable XML element name")
        if mapping.element in (ROOT_ELEMENT, ITEM_ELEMENT):
            raise ConfigurationError(f"Element '{mapping.element}' clashes with a container element")
        if mapping.element in by_element:
            raise ConfigurationError(f"Element '{mapping.element}' is mapped twice")
        by_element[mapping.element] = mapping

    attributes = [m.attribute for m in fields]
    if len(set(attributes)) != len(attributes):
        raise ConfigurationError("A Country attribute is mapped more than once")

    required = {m.attribute for m in fields if m.required}
    if required != set(REQUIRED_FIELDS):
        raise ConfigurationError(
            f"Required elements {sorted(required)} do not match Country {sorted(REQUIRED_FIELDS)}"
        )
    return by_element


FIELDS_BY_ELEMENT = validate_mapping()
