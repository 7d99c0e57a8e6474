# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import orjson

from vusim.common.constants import HTTP_TIMEOUT_ERROR_CODE
from vusim.common.models import ErrorDetails, HttpResponse, RequestResult
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)

IDENTITY_TARGET_HEADER = "x-amz-target"


def parse_response(response: HttpResponse) -> RequestResult:
    """Normalize a raw HTTP response into a :class:`RequestResult`.

    - A body starting with `{` or `[` is parsed as JSON. Other bodies are ignored.
    - An `error` object in the body supplies the application code and message.
    - A transport error supplies the message.
    - A non-2xx status is recorded, with `"HTTP status <n>"` when nothing
      else explained the failure.
    - A transport error code fills in a missing application code.
    - Every error records the request method, URL and identity target.
    """
    body = None
    error: ErrorDetails | None = None

    text = response.body.lstrip() if response.body else ""
    if text[:1] in ("{", "["):
        try:
            body = orjson.loads(text)
        except orjson.JSONDecodeError as e:
            _logger.debug(lambda: f"Unparseable body from {response.url}: {e}")
            error = ErrorDetails(message=f"Malformed JSON response: {e}")

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        body_error = body["error"]
        code = body_error.get("code")
        error = ErrorDetails(
            code=code if isinstance(code, int) else None,
            message=body_error.get("msg") or body_error.get("message"),
        )

    if response.error:
        error = error or ErrorDetails()
        error.message = response.error

    if response.status is not None and not response.is_success_status:
        error = error or ErrorDetails()
        error.status = response.status
        if not error.message:
            error.message = f"HTTP status {response.status}"

    if response.error_code and (error is None or error.code is None):
        error = error or ErrorDetails()
        error.code = response.error_code
        if response.error_code == HTTP_TIMEOUT_ERROR_CODE and not error.message:
            error.message = "Timeout"

    if error is not None:
        error.method = response.method
        error.url = response.url
        error.target = _header(response.request_headers, IDENTITY_TARGET_HEADER)

    return RequestResult(body=body, error=error)


def _header(headers: dict[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
