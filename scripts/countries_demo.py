#!/usr/bin/env python3
"""Marshal a sample country to XML and unmarshal a countries document.

Usage::

    python -m scripts.countries_demo OUTPUT_XML INPUT_XML [--compact]

The sample record is written to ``OUTPUT_XML`` (an existing file is never
overwritten) and echoed to stdout. ``INPUT_XML`` is then parsed and every
country in it is printed field by field.
"""

from __future__ import annotations

import os
import sys
from typing import List, Optional, TextIO

from config.settings import configure_logging
from domain.models.countries import Countries
from domain.models.country import Country
from middleware.errors import CodecError, DestinationExistsError
from services.xml_codec import deserialize, serialize

USAGE = "Usage: python -m scripts.countries_demo OUTPUT_XML INPUT_XML [--compact]"


def build_sample_country() -> Country:
    country = Country()
    country.country_code = "ua"
    country.name = "Ukraine"
    country.capital = "Brussels"
    country.description = (
        "Tuam veneramur voluntatem tuam ut vitam tuam pro nostra des causa. "
        "Oh, tantum te amamus!"
    )
    return country


def print_countries(countries: Countries, out: TextIO) -> None:
    for country in countries:
        print(f"Country Code: {country.country_code}", file=out)
        print(f"Name: {country.name}", file=out)
        print(f"Capital: {country.capital}", file=out)
        print(f"Description: {country.description}", file=out)
        print(file=out)


def run_demo(output_path: str, input_path: str, *, pretty: bool = True, out: Optional[TextIO] = None) -> Countries:
    """Run the marshal → echo → unmarshal → print pipeline.

    Codec errors propagate, except an existing output file which is reported
    and skipped.
    """
    out = out or sys.stdout
    country = build_sample_country()

    name = os.path.basename(output_path)
    location = os.path.dirname(os.path.abspath(output_path))

    print("Marshalling:\n------------\n", file=out)
    try:
        serialize(country, output_path, pretty=pretty)
        print(f"{name} created at: {location}", file=out)
    except DestinationExistsError as exc:
        print(f"{name} document already exists: {os.path.abspath(exc.path)}", file=out)

    print(f"reading {name} ↷\n", file=out)
    serialize(country, out, pretty=pretty)

    print("\n\nUnmarshalling:\n--------------\n", file=out)
    countries = deserialize(input_path)
    print_countries(countries, out)
    return countries


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    pretty = "--compact" not in args
    paths = [arg for arg in args if arg != "--compact"]
    if len(paths) != 2:
        print(USAGE, file=sys.stderr)
        return 2

    configure_logging()
    try:
        run_demo(paths[0], paths[1], pretty=pretty)
    except CodecError as exc:
        print(f"{exc.__class__.__name__}: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution only
    sys.exit(main())
