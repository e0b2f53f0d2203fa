import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from . import config
from .formatter import LocaleAmountFormatter
from .locales import LocaleRegistry, default_registry

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return bool(value)


def create_app(registry: LocaleRegistry | None = None,
               default_language: str | None = None) -> Flask:
    app = Flask(__name__)
    CORS(app)

    if default_language is None:
        default_language = config.DEFAULT_LANGUAGE
    formatter = LocaleAmountFormatter(registry or default_registry(), default_language)
    app.config["FORMATTER"] = formatter

    # -------------------------------
    # Flask endpoints
    # -------------------------------
    @app.route("/format", methods=["GET", "POST"])
    def format_endpoint():
        """
        Format a number for a language, optionally as a currency amount.

        GET example:
          /format?value=41131.935&lang=fr&currency=EUR&extended=1

        POST example (JSON body):
          {
            "value": 41131.935,
            "lang": "en",
            "digits": 2
          }

        Without `lang`, the request's Accept-Language is used.
        """
        if request.method == "GET":
            data = request.args
        else:  # POST
            data = request.get_json(silent=True) or {}
            if not isinstance(data, dict):
                return jsonify({"error": "body must be a JSON object"}), 400

        value = data.get("value")
        lang = data.get("lang")
        digits = data.get("digits")
        currency = data.get("currency")
        extended = _as_bool(data.get("extended", False))

        if value is None:
            return jsonify({"error": "value is required"}), 400

        try:
            value = float(value)
        except (TypeError, ValueError):
            return jsonify({"error": "value must be numeric"}), 400

        selector = digits if digits is not None else currency
        ambient = request.accept_languages.best or formatter.default_language

        try:
            formatted = formatter.format(value, lang, selector, extended,
                                         default_language=ambient)
        except ValueError as exc:
            logger.error(f"Error formatting {value!r}: {exc}")
            return jsonify({"error": str(exc)}), 400

        return jsonify({
            "input": {
                "value": value,
                "lang": lang,
                "digits": digits,
                "currency": currency,
                "extended": extended,
            },
            "formatted": formatted
        })

    @app.route("/locales", methods=["GET"])
    def list_locales():
        """Show available languages and their currencies."""
        registry = formatter.registry
        locales = {}
        for code in registry.languages():
            rule = registry.get(code)
            locales[code] = {
                "thousands_separator": rule.thousands_separator,
                "decimal_separator": rule.decimal_separator,
                "thousandths_separator": rule.thousandths_separator,
                "currencies": sorted(rule.currencies),
            }
        return jsonify({"locales": locales})

    @app.route("/locales/<code>", methods=["GET"])
    def get_locale(code):
        rule = formatter.registry.get(code.lower())
        if rule is None:
            return jsonify({"error": f"Unknown locale: {code}"}), 404
        return jsonify({"code": code.lower(), "locale": rule.to_dict()})

    return app


def main():
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    )
    app = create_app()
    logger.info(f"Starting locale amount service on {config.HOST}:{config.PORT}")
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
