import io
import xml.etree.ElementTree as ET

import pytest

from domain.models.countries import Countries
from domain.models.country import Country
from middleware.errors import (
    DestinationExistsError,
    EncodeError,
    EncodeIOError,
    InvalidFieldValueError,
    IOFailureError,
    MissingRequiredFieldError,
)
from services.xml_codec import XmlCodec, deserialize, dumps, loads, serialize


def test_round_trip_through_file_preserves_order(tmp_path, sample_countries):
    target = tmp_path / "countries.xml"

    serialize(sample_countries, target)
    result = deserialize(target)

    assert result == sample_countries
    assert [c.country_code for c in result] == ["ua", "be", "hr"]


@pytest.mark.parametrize("pretty", [True, False])
def test_round_trip_through_string(sample_countries, pretty):
    assert loads(dumps(sample_countries, pretty=pretty)) == sample_countries


def test_empty_and_absent_description_are_kept_apart(sample_countries):
    result = loads(dumps(sample_countries))

    assert result[1].description == ""
    assert result[2].description is None


def test_single_country_is_wrapped(tmp_path, ukraine):
    target = tmp_path / "App_output.xml"

    serialize(ukraine, target)

    root = ET.parse(target).getroot()
    assert root.tag == "countries"
    assert [child.tag for child in root] == ["country"]
    assert deserialize(target) == Countries.of(ukraine)


def test_pretty_output_is_indented(ukraine):
    text = dumps(ukraine, pretty=True)

    assert text.startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<countries>\n')
    assert "\n    <country>\n        <countryCode>ua</countryCode>\n" in text
    assert text.endswith("</countries>\n")


def test_compact_output_is_single_line(ukraine):
    text = dumps(ukraine, pretty=False)

    assert "\n" not in text
    assert "<country><countryCode>ua</countryCode><name>Ukraine</name>" in text


def test_pretty_and_compact_differ_but_parse_equal(sample_countries):
    pretty = dumps(sample_countries, pretty=True)
    compact = dumps(sample_countries, pretty=False)

    assert pretty != compact
    assert loads(pretty) == loads(compact)


def test_elements_follow_mapping_order():
    country = Country(description="d", capital="c", name="n", country_code="cc")
    root = ET.fromstring(dumps(country, pretty=False))

    assert [child.tag for child in root[0]] == ["countryCode", "name", "capital", "description"]


def test_special_characters_are_escaped(tmp_path):
    country = Country(country_code="ci", name="Côte d'Ivoire", capital="Yamoussoukro", description="<a> & \"b\"")

    target = tmp_path / "ci.xml"
    serialize(country, target)

    assert b"&lt;a&gt; &amp;" in target.read_bytes()
    assert deserialize(target)[0] == country


def test_empty_collection_round_trips():
    assert loads(dumps(Countries())) == Countries()


@pytest.mark.parametrize("field", ["country_code", "name", "capital"])
def test_required_fields_are_enforced(tmp_path, ukraine, field):
    setattr(ukraine, field, "")
    target = tmp_path / "out.xml"

    with pytest.raises(MissingRequiredFieldError) as excinfo:
        serialize(ukraine, target)

    assert excinfo.value.field == field
    assert excinfo.value.index == 0
    assert isinstance(excinfo.value, EncodeError)
    assert not target.exists()


def test_missing_field_reports_offending_record(sample_countries):
    sample_countries.append(Country(country_code="xx", name="Nowhere"))

    with pytest.raises(MissingRequiredFieldError) as excinfo:
        dumps(sample_countries)

    assert excinfo.value.field == "capital"
    assert excinfo.value.index == 3


def test_nothing_is_written_to_stream_on_validation_failure():
    stream = io.StringIO()

    with pytest.raises(MissingRequiredFieldError):
        serialize(Countries.of(Country(name="Ukraine", capital="Kyiv")), stream)

    assert stream.getvalue() == ""


def test_existing_destination_is_not_overwritten(tmp_path, ukraine):
    target = tmp_path / "App_output.xml"
    serialize(ukraine, target)
    first = target.read_bytes()

    other = Country(country_code="be", name="Belgium", capital="Brussels")
    with pytest.raises(DestinationExistsError) as excinfo:
        serialize(other, target, pretty=False)

    assert excinfo.value.path == str(target)
    assert target.read_bytes() == first


def test_unwritable_destination_raises_io_failure(tmp_path, ukraine):
    target = tmp_path / "missing-dir" / "out.xml"

    with pytest.raises(EncodeIOError) as excinfo:
        serialize(ukraine, target)

    assert isinstance(excinfo.value, IOFailureError)
    assert isinstance(excinfo.value.cause, OSError)


def test_serialize_to_text_and_binary_streams(ukraine):
    text_stream = io.StringIO()
    binary_stream = io.BytesIO()

    serialize(ukraine, text_stream, pretty=False)
    serialize(ukraine, binary_stream, pretty=False)

    assert binary_stream.getvalue() == text_stream.getvalue().encode("utf-8")
    assert deserialize(io.BytesIO(binary_stream.getvalue())) == Countries.of(ukraine)
    assert deserialize(io.StringIO(text_stream.getvalue())) == Countries.of(ukraine)


def test_failing_stream_raises_io_failure(ukraine):
    class BrokenStream(io.RawIOBase):
        def writable(self):
            return True

        def write(self, data):
            raise OSError("disk full")

    with pytest.raises(EncodeIOError):
        serialize(ukraine, BrokenStream())


def test_codec_options_are_per_instance(ukraine):
    compact = XmlCodec(pretty=False)
    pretty = XmlCodec(pretty=True)

    assert "\n" not in compact.render(ukraine)
    assert "\n" in pretty.render(ukraine)
    assert compact.render(ukraine) == dumps(ukraine, pretty=False)


def test_non_record_input_is_a_type_error(tmp_path):
    with pytest.raises(TypeError):
        serialize([{"countryCode": "ua"}], tmp_path / "out.xml")


@pytest.mark.parametrize("pretty", [True, False])
def test_carriage_returns_survive_round_trip(ukraine, pretty):
    ukraine.description = "line1\r\nline2\rline3"

    text = dumps(ukraine, pretty=pretty)

    assert "\r" not in text
    assert loads(text) == Countries.of(ukraine)


@pytest.mark.parametrize(
    "field,value",
    [
        ("name", "Ukr\x01aine"),
        ("country_code", "u\x00a"),
        ("capital", "Ky\x0biv"),
        ("description", "bad \ufffe char"),
        ("description", "lone \ud800 surrogate"),
    ],
)
def test_characters_outside_xml_are_rejected_before_writing(tmp_path, ukraine, field, value):
    setattr(ukraine, field, value)
    target = tmp_path / "out.xml"

    with pytest.raises(InvalidFieldValueError) as excinfo:
        serialize(ukraine, target)

    assert excinfo.value.field == field
    assert excinfo.value.index == 0
    assert isinstance(excinfo.value, EncodeError)
    assert not target.exists()


def test_tabs_newlines_and_astral_characters_are_allowed(ukraine):
    ukraine.description = "tab\there\nnew line \U0001F1FA\U0001F1E6"
    assert loads(dumps(ukraine, pretty=False)) == Countries.of(ukraine)
