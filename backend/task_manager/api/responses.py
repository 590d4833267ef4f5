"""Response Envelope — uniform success/error bodies for every endpoint.

Invariants:
    - statusCode in the body always equals the HTTP status of the response
    - Error envelopes never carry a data key
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_body(data: Any, message: str, status_code: int) -> dict:
    return {
        "status": "success",
        "statusCode": status_code,
        "message": message,
        "data": jsonable_encoder(data),
    }


def error_body(message: str, status_code: int) -> dict:
    return {
        "statusCode": status_code,
        "status": "error",
        "message": message,
    }


def send_success(
    data: Any, message: str = "Success", status_code: int = 200,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=success_body(data, message, status_code),
    )


def send_error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=error_body(message, status_code),
    )
