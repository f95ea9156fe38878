import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from unfurl.feed_utils import ConfigurationError, RecordStoreError, build_feed
from unfurl.icon_utils import resolve_brand_icon
from unfurl.log_utils import configure_logging
from unfurl.oembed_utils import OEMBED_PROVIDERS, fetch_oembed_title
from unfurl.preview import fetch_preview

ENV = os.getenv("FLASK_ENV", "development")

if not logging.getLogger().handlers:
    configure_logging()
log = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev')
app.config['BRANDFETCH_API_KEY'] = os.environ.get('BRANDFETCH_API_KEY')
# Set by the deployment to a RecordStore (Baserow/Coda client).
app.config['RECORD_STORE'] = None

if not app.config['BRANDFETCH_API_KEY']:
    log.warning("BRANDFETCH_API_KEY not set; brand logos will be empty")


def missing(param):
    return jsonify({"error": f"{param} required"}), 400


@app.errorhandler(HTTPException)
def handle_http(e):
    return jsonify({"error": e.name, "message": e.description}), e.code


@app.errorhandler(Exception)
def handle_unexpected(e):
    log.exception("Unhandled error on %s", request.path)
    return jsonify({"error": "Internal Server Error"}), 500


@app.get("/healthz")
def healthz():
    return "ok", 200


@app.get("/preview")
def preview():
    url = request.args.get("url", "").strip()
    if not url:
        return missing("url")
    return jsonify(fetch_preview(url).to_dict())


@app.get("/video-title")
def video_title():
    url = request.args.get("url", "").strip()
    kind = request.args.get("type", "").strip().lower()
    if not url or not kind:
        return missing("url and type")
    if kind not in OEMBED_PROVIDERS:
        return jsonify({"error": "Invalid type"}), 400
    return jsonify({"title": fetch_oembed_title(url, kind).get("title")})


@app.get("/brand-logo")
def brand_logo():
    domain = request.args.get("domain", "").strip()
    if not domain:
        return missing("domain")
    logo = resolve_brand_icon(domain, api_key=app.config['BRANDFETCH_API_KEY'])
    return jsonify({"logo": logo})


@app.get("/feed")
def feed():
    store = app.config.get('RECORD_STORE')
    if store is None:
        return jsonify({"error": "Record store not configured"}), 503
    try:
        cards = build_feed(store, api_key=app.config['BRANDFETCH_API_KEY'])
    except ConfigurationError as e:
        log.error("record store misconfigured: %s", e)
        return jsonify({"error": "Record store not configured"}), 503
    except RecordStoreError as e:
        log.error("record store unavailable: %s", e)
        return jsonify({"error": "Failed to load feed"}), 502
    return jsonify({"items": [c.to_dict() for c in cards]})


if __name__ == '__main__':
    app.run(debug=ENV == "development", host='0.0.0.0', port=8080)
