"""API routes exposing the countries XML codec."""

from __future__ import annotations

from collections.abc import Mapping

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from domain.models.countries import Countries
from domain.models.country import Country
from middleware.errors import ValidationError
from services.xml_codec import deserialize, dumps, loads

countries_bp = Blueprint("countries", __name__, url_prefix="/countries")

XML_MIMETYPE = "application/xml"


def _pretty_flag() -> bool | None:
    raw = request.args.get("pretty")
    if raw is None:
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _countries_from_payload(payload) -> Countries:
    """Accept ``{"countries": [...]}``, a bare list, or a single country object."""
    if isinstance(payload, Mapping) and "countries" in payload:
        items = payload["countries"]
    elif isinstance(payload, Mapping):
        items = [payload]
    else:
        items = payload

    if not isinstance(items, list):
        raise ValidationError("Expected a list of countries")

    countries = Countries()
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"Country #{index} is not an object", {"index": index})
        try:
            countries.append(Country.from_dict(dict(item)) or Country())
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Country #{index} is invalid",
                {"index": index, "errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
    return countries


@countries_bp.route("/marshal", methods=["POST"])
def marshal_countries():
    """Convert a JSON list of countries into an XML document."""
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Request body must be JSON")

    countries = _countries_from_payload(payload)
    document = dumps(countries, pretty=_pretty_flag())
    current_app.logger.debug("Marshalled %d countries over HTTP", len(countries))
    return Response(document, mimetype=XML_MIMETYPE)


@countries_bp.route("/unmarshal", methods=["POST"])
def unmarshal_countries():
    """Parse an uploaded XML document (raw body or ``file`` field) into JSON."""
    upload = request.files.get("file")
    if upload is not None:
        countries = deserialize(upload.stream)
    else:
        body = request.get_data()
        if not body:
            raise ValidationError("Request body is empty")
        countries = loads(body)

    return jsonify({
        "status": "ok",
        "count": len(countries),
        "countries": [country.model_dump(by_alias=True) for country in countries],
    }), 200
