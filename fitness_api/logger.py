"""
Logging setup and the per-request access log.
"""
import logging
import time

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"

request_logger = logging.getLogger("fitness_api.requests")


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    if not any(getattr(h, "_fitness_api", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._fitness_api = True
        root.addHandler(handler)
    root.setLevel(level)


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def log_request():
        g.request_started = time.perf_counter()
        request_logger.info("Request: %s %s", request.method, request.full_path.rstrip("?"))

    @app.after_request
    def log_response(response):
        started = g.pop("request_started", None)
        elapsed = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        request_logger.info("Response: %s %dms", response.status, elapsed)
        return response
