"""Uniform JSON response bodies for the HTTP API."""

from typing import Any, Tuple

from flask import Response, jsonify


def success_response(status: int = 200, **fields: Any) -> Tuple[Response, int]:
    return jsonify(success=True, **fields), status


def error_response(message: str, status: int, **fields: Any) -> Tuple[Response, int]:
    return jsonify(success=False, error=message, **fields), status
