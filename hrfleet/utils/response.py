from typing import Any


def message_response(message: str, **extra: Any) -> dict:
    return {"message": message, **extra}


def error_response(message: str, error: str | None = None, errors: list | None = None) -> dict:
    body: dict[str, Any] = {"message": message}
    if error is not None:
        body["error"] = error
    if errors is not None:
        body["errors"] = errors
    return body
