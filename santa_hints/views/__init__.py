from flask import request


def json_body() -> dict:
    """The request's JSON object, or {} for a missing body or any non-object JSON."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
