# services/xml_codec.py
"""
Marshalling and unmarshalling of Country records to and from XML.

Public interface mirrors :mod:`pickle` / :mod:`json`:

    serialize(countries, destination, pretty=True)   -> writes a document
    deserialize(source)                               -> Countries
    dumps(countries, pretty=True)                     -> str
    loads(text)                                       -> Countries

``destination`` / ``source`` is either a filesystem path or an open stream
(text or binary). Every call is single-shot: an :class:`XmlCodec` holding the
formatting options is built per call and nothing is kept between calls.

Parsing is fail-closed. Anything outside the countries schema (unknown
elements, attributes, stray text, repeated or missing required fields)
raises :class:`SchemaMismatchError` instead of being skipped.
"""
from __future__ import annotations

import io
import logging
import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import IO, Any

from config import settings
from domain.models.countries import Countries
from domain.models.country import Country
from domain.schema import COUNTRY_FIELDS, FIELDS_BY_ELEMENT, ITEM_ELEMENT, ROOT_ELEMENT
from middleware.errors import (
    DecodeIOError,
    DestinationExistsError,
    EncodeIOError,
    InvalidFieldValueError,
    MalformedDocumentError,
    MissingRequiredFieldError,
    SchemaMismatchError,
)

logger = logging.getLogger(__name__)

PathType = str | bytes | os.PathLike
INDENT = "    "

# anything outside the XML 1.0 Char production
_INVALID_XML_CHAR_RE = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _is_path(target: Any) -> bool:
    return isinstance(target, (str, bytes, os.PathLike))


def _as_countries(obj: Countries | Country) -> Countries:
    if isinstance(obj, Countries):
        return obj
    if isinstance(obj, Country):
        return Countries.of(obj)
    raise TypeError(f"Expected Countries or Country, got {type(obj).__name__}")


@dataclass(frozen=True)
class XmlCodec:
    """Formatting options for one marshalling / unmarshalling call."""

    pretty: bool = True
    encoding: str = "UTF-8"

    # -----------------------
    # Marshalling
    # -----------------------

    def validate(self, countries: Countries) -> None:
        for index, country in enumerate(countries):
            missing = country.missing_required_fields()
            if missing:
                raise MissingRequiredFieldError(missing[0], index)
            for mapping in COUNTRY_FIELDS:
                value = getattr(country, mapping.attribute)
                if value is not None and _INVALID_XML_CHAR_RE.search(value):
                    raise InvalidFieldValueError(mapping.attribute, index)

    def to_element(self, countries: Countries) -> ET.Element:
        root = ET.Element(ROOT_ELEMENT)
        for country in countries:
            item = ET.SubElement(root, ITEM_ELEMENT)
            for mapping in COUNTRY_FIELDS:
                value = getattr(country, mapping.attribute)
                if value is None:
                    continue
                ET.SubElement(item, mapping.element).text = value
        return root

    def render(self, obj: Countries | Country) -> str:
        """Validate ``obj`` and return the complete document as text."""
        countries = _as_countries(obj)
        self.validate(countries)
        root = self.to_element(countries)
        if self.pretty:
            ET.indent(root, space=INDENT)
        declaration = f'<?xml version="1.0" encoding="{self.encoding}" standalone="yes"?>'
        # a literal CR would be folded into LF by any XML parser
        body = ET.tostring(root, encoding="unicode").replace("\r", "&#13;")
        if self.pretty:
            return f"{declaration}\n{body}\n"
        return declaration + body

    def serialize(self, obj: Countries | Country, destination: PathType | IO) -> None:
        text = self.render(obj)
        if _is_path(destination):
            self._write_file(os.fsdecode(destination), text.encode(self.encoding, "xmlcharrefreplace"))
        else:
            self._write_stream(destination, text)
        logger.debug("Marshalled %d countries to %r", len(_as_countries(obj)), destination)

    def _write_file(self, path: str, data: bytes) -> None:
        if os.path.exists(path):
            logger.warning("Refusing to overwrite existing document %s", path)
            raise DestinationExistsError(path)
        try:
            fh = open(path, "xb")
        except FileExistsError as exc:
            logger.warning("Refusing to overwrite existing document %s", path)
            raise DestinationExistsError(path) from exc
        except OSError as exc:
            raise EncodeIOError(exc, path) from exc

        try:
            with fh:
                fh.write(data)
        except OSError as exc:
            # drop the partial document
            try:
                os.remove(path)
            except OSError:
                logger.warning("Could not remove partial document %s", path)
            raise EncodeIOError(exc, path) from exc

    def _write_stream(self, stream: IO, text: str) -> None:
        try:
            if isinstance(stream, io.TextIOBase):
                stream.write(text)
            else:
                stream.write(text.encode(self.encoding, "xmlcharrefreplace"))
        except OSError as exc:
            raise EncodeIOError(exc) from exc

    # -----------------------
    # Unmarshalling
    # -----------------------

    def deserialize(self, source: PathType | IO) -> Countries:
        if _is_path(source):
            path = os.fsdecode(source)
            try:
                with open(path, "rb") as fh:
                    data = fh.read()
            except OSError as exc:
                raise DecodeIOError(exc, path) from exc
        else:
            try:
                data = source.read()
            except OSError as exc:
                raise DecodeIOError(exc) from exc

        countries = self.parse(data)
        logger.debug("Unmarshalled %d countries from %r", len(countries), source)
        return countries

    def parse(self, data: str | bytes) -> Countries:
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            line, column = getattr(exc, "position", (None, None))
            raise MalformedDocumentError(str(exc), line, column) from exc
        return decode_root(root)


# -----------------------
# Tree decoding
# -----------------------

def _reject_attributes(element: ET.Element) -> None:
    if element.attrib:
        name = next(iter(element.attrib))
        raise SchemaMismatchError("no attributes", f"attribute '{name}'", element.tag)


def _reject_text(text: str | None, context: str) -> None:
    if text and text.strip():
        raise SchemaMismatchError("element content", f"text '{text.strip()[:40]}'", context)


def decode_root(root: ET.Element) -> Countries:
    """Map a parsed ``<countries>`` element onto :class:`Countries`."""
    if root.tag != ROOT_ELEMENT:
        raise SchemaMismatchError(f"<{ROOT_ELEMENT}>", f"<{root.tag}>")
    _reject_attributes(root)
    _reject_text(root.text, ROOT_ELEMENT)

    countries = Countries()
    for element in root:
        _reject_text(element.tail, ROOT_ELEMENT)
        if element.tag != ITEM_ELEMENT:
            raise SchemaMismatchError(f"<{ITEM_ELEMENT}>", f"<{element.tag}>", ROOT_ELEMENT)
        countries.append(decode_country(element))
    return countries


def decode_country(element: ET.Element) -> Country:
    _reject_attributes(element)
    _reject_text(element.text, ITEM_ELEMENT)

    values: dict[str, str] = {}
    for child in element:
        _reject_text(child.tail, ITEM_ELEMENT)
        mapping = FIELDS_BY_ELEMENT.get(child.tag)
        if mapping is None:
            expected = "one of " + ", ".join(f"<{m.element}>" for m in COUNTRY_FIELDS)
            raise SchemaMismatchError(expected, f"<{child.tag}>", ITEM_ELEMENT)
        if mapping.attribute in values:
            raise SchemaMismatchError(f"a single <{child.tag}>", f"a repeated <{child.tag}>", ITEM_ELEMENT)
        _reject_attributes(child)
        if len(child):
            raise SchemaMismatchError("text", f"<{child[0].tag}>", child.tag)
        values[mapping.attribute] = child.text or ""

    for mapping in COUNTRY_FIELDS:
        if mapping.required and not values.get(mapping.attribute, "").strip():
            found = "an empty element" if mapping.attribute in values else "nothing"
            raise SchemaMismatchError(f"<{mapping.element}>", found, ITEM_ELEMENT)

    return Country(**values)


# -----------------------
# Module-level API
# -----------------------

def _codec(pretty: bool | None = None) -> XmlCodec:
    return XmlCodec(
        pretty=settings.PRETTY_PRINT if pretty is None else pretty,
        encoding=settings.ENCODING,
    )


def serialize(obj: Countries | Country, destination: PathType | IO, *, pretty: bool | None = None) -> None:
    """Write ``obj`` as an XML document to a new file or an open stream.

    Raises DestinationExistsError instead of overwriting an existing file,
    and MissingRequiredFieldError before anything is written.
    """
    _codec(pretty).serialize(obj, destination)


def deserialize(source: PathType | IO) -> Countries:
    """Read a countries document from a path or an open stream."""
    return _codec().deserialize(source)


def dumps(obj: Countries | Country, *, pretty: bool | None = None) -> str:
    return _codec(pretty).render(obj)


def loads(data: str | bytes) -> Countries:
    return _codec().parse(data)
