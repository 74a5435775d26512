"""Flask application factory for the screening recommendations API."""

from flask import Blueprint, Flask, current_app, jsonify, request

from .config import config as default_config
from .profile_reader import read_profile
from .renderer import render_json
from .rules import SCREENING_RULES, evaluate

screening_bp = Blueprint("screening", __name__)


@screening_bp.route("/health")
def health():
    return jsonify({"status": "ok"})


@screening_bp.route("/api/rules")
def list_rules():
    """Screening catalog in evaluation order."""
    return jsonify([
        {"rule_id": rule.rule_id, "topic": rule.topic}
        for rule in SCREENING_RULES
    ])


@screening_bp.route("/api/recommendations", methods=["POST"])
def recommendations():
    """Evaluate one profile submitted as JSON form fields.

    Returns 400 with an error message if the body is not a JSON object
    or the profile cannot be read.
    """
    fields = request.get_json(silent=True)
    if not isinstance(fields, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        profile = read_profile(fields)
    except ValueError as e:
        current_app.logger.info(f"Rejected screening profile: {e}")
        return jsonify({"error": str(e)}), 400

    recs = evaluate(profile)
    return jsonify({
        "guideline": current_app.config.get("GUIDELINE_LABEL", ""),
        "count": len(recs),
        "recommendations": render_json(recs),
    })


def create_app(config=None):
    """Create and configure the Flask application.

    Args:
        config: Optional configuration object or dict

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.json.ensure_ascii = False

    app.config.from_object(default_config)

    if isinstance(config, dict):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    # An explicit label wins; otherwise build it from the final source/year
    if "GUIDELINE_LABEL" not in app.config:
        app.config["GUIDELINE_LABEL"] = (
            f"{app.config['GUIDELINE_SOURCE']} {app.config['GUIDELINE_YEAR']}"
        )

    app.register_blueprint(screening_bp)

    return app


def run_dev_server():
    """Run development server."""
    app = create_app()
    app.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=app.config["DEBUG"],
    )


if __name__ == "__main__":
    run_dev_server()
