"""System endpoints (health check)."""

from flask import Blueprint, jsonify

from domain.schema import COUNTRY_FIELDS, ITEM_ELEMENT, ROOT_ELEMENT

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check():
    """Simple health-check route."""
    return jsonify({"status": "ok"}), 200


@system_bp.route("/schema", methods=["GET"])
def describe_schema():
    """Describe the document layout accepted by the codec."""
    return jsonify({
        "status": "ok",
        "root": ROOT_ELEMENT,
        "item": ITEM_ELEMENT,
        "fields": [
            {"element": m.element, "attribute": m.attribute, "required": m.required}
            for m in COUNTRY_FIELDS
        ],
    }), 200
