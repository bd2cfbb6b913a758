import json
import logging
import math
import threading
import uuid
from typing import Any, Callable, Dict, Optional

from flask import Blueprint, Response, jsonify, request

from error_handler import InvalidRequestError, ScraperError, handle_api_error
from log_events import evt
from logging_setup import clear_request_ctx, set_request_ctx
from scraper_config import get_scraper_config
from youtube_http import YouTubePageFetcher
from youtube_resources import get_channel_details, get_playlist_details, get_video_details
from youtube_search import search_youtube

api_routes = Blueprint("api_routes", __name__)

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET,POST,OPTIONS",
    "access-control-allow-headers": "content-type",
}

ROUTES_HELP = {
    "health": "GET /health",
    "search_get": "GET /api/search?q=booba&type=video&limit=5",
    "search_post": 'POST /api/search {"q":"booba","type":"video","limit":5}',
    "video_get": "GET /api/video/dQw4w9WgXcQ?relatedLimit=5",
    "playlist_get": "GET /api/playlist/PL...?...",
    "channel_get": "GET /api/channel/UC...?...",
}

# One fetcher (and HTTP session) per server thread
_local = threading.local()


def _fetcher() -> YouTubePageFetcher:
    if not hasattr(_local, "fetcher"):
        _local.fetcher = YouTubePageFetcher()
    return _local.fetcher


def _number_if_present(value: Any) -> Optional[float]:
    """Numeric query/body value, or None when absent or not a finite number."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _parse_body() -> Dict[str, Any]:
    """Parse a JSON request body; empty body means no parameters."""
    max_bytes = get_scraper_config().max_body_bytes
    if request.content_length is not None and request.content_length > max_bytes:
        raise InvalidRequestError("payload too large")

    raw = request.get_data(cache=False)
    if len(raw) > max_bytes:
        raise InvalidRequestError("payload too large")
    if not raw:
        return {}

    try:
        body = json.loads(raw)
    except ValueError:
        raise InvalidRequestError("invalid json body")
    return body if isinstance(body, dict) else {}


def _run(endpoint: str, operation: Callable[[], Any]):
    """Run a scraper call and turn its result or failure into a JSON response."""
    try:
        result = operation()
    except ScraperError as e:
        payload, status = handle_api_error(endpoint, e)
        return jsonify(payload), status
    except Exception as e:
        logging.exception(f"Unexpected error in {endpoint}")
        payload, status = handle_api_error(endpoint, e)
        return jsonify(payload), status
    return jsonify(result.to_dict()), 200


def _detail_options() -> Dict[str, Any]:
    args = request.args
    return {
        "hl": _str_or_none(args.get("hl")),
        "gl": _str_or_none(args.get("gl")),
        "limit": _number_if_present(args.get("limit")),
        "related_limit": _number_if_present(args.get("relatedLimit") or args.get("related_limit")),
    }


# --- Request lifecycle ---

@api_routes.before_app_request
def start_request():
    set_request_ctx(request_id=uuid.uuid4().hex[:12])
    if request.method == "OPTIONS":
        return Response(status=204)
    return None


@api_routes.after_app_request
def add_cors_headers(response):
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value
    evt("api_request", method=request.method, path=request.path, status_code=response.status_code)
    return response


@api_routes.teardown_app_request
def end_request(exc):
    clear_request_ctx()


@api_routes.app_errorhandler(404)
@api_routes.app_errorhandler(405)
def not_found(error):
    return jsonify({"error": "not found", "routes": ROUTES_HELP}), 404


# --- Search ---

@api_routes.route("/api/search", methods=["GET"])
def search_get():
    args = request.args
    query = args.get("q") or args.get("query") or ""
    if not query:
        return jsonify({"error": "missing query: use ?q=..."}), 400

    return _run("search", lambda: search_youtube(
        query,
        limit=_number_if_present(args.get("limit")),
        kind=_str_or_none(args.get("type")),
        hl=_str_or_none(args.get("hl")),
        gl=_str_or_none(args.get("gl")),
        fetcher=_fetcher(),
    ))


@api_routes.route("/api/search", methods=["POST"])
def search_post():
    try:
        body = _parse_body()
    except InvalidRequestError as e:
        return jsonify({"error": str(e)}), 400

    query = _str_or_none(body.get("q")) or _str_or_none(body.get("query")) or ""
    if not query:
        return jsonify({"error": "missing query: body.q or body.query required"}), 400

    return _run("search", lambda: search_youtube(
        query,
        limit=_number_if_present(body.get("limit")),
        kind=_str_or_none(body.get("type")),
        hl=_str_or_none(body.get("hl")),
        gl=_str_or_none(body.get("gl")),
        fetcher=_fetcher(),
    ))


# --- Details ---

@api_routes.route("/api/video/<path:video_id>", methods=["GET"])
def video_details(video_id):
    opts = _detail_options()
    return _run("video", lambda: get_video_details(
        video_id, hl=opts["hl"], gl=opts["gl"], related_limit=opts["related_limit"], fetcher=_fetcher(),
    ))


@api_routes.route("/api/playlist/<path:list_id>", methods=["GET"])
def playlist_details(list_id):
    opts = _detail_options()
    return _run("playlist", lambda: get_playlist_details(
        list_id, hl=opts["hl"], gl=opts["gl"], limit=opts["limit"], fetcher=_fetcher(),
    ))


@api_routes.route("/api/channel/<path:channel_id>", methods=["GET"])
def channel_details(channel_id):
    opts = _detail_options()
    return _run("channel", lambda: get_channel_details(
        channel_id, hl=opts["hl"], gl=opts["gl"], limit=opts["limit"], fetcher=_fetcher(),
    ))
