# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any

from pydantic import Field

from vusim.common.models.base_models import VUSimBaseModel


class HttpResponse(VUSimBaseModel):
    """Raw outcome of a single HTTP attempt, as seen by the transport.

    A connection level failure has no `status` and carries `error` and
    `error_code` instead.
    """

    method: str = Field(..., description="HTTP method of the request.")
    url: str = Field(..., description="Full URL of the request.")
    request_headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with the request."
    )
    status: int | None = Field(
        default=None,
        description="HTTP status code, or None if no response was received.",
    )
    body: str = Field(default="", description="Response body text.")
    error: str | None = Field(
        default=None, description="Transport error message, if the request failed."
    )
    error_code: int | None = Field(
        default=None, description="Transport error code, if the request failed."
    )
    start_perf_ns: int = Field(default=0, description="Request start time.")
    end_perf_ns: int = Field(default=0, description="Request end time.")

    @property
    def latency_ns(self) -> int:
        return max(0, self.end_perf_ns - self.start_perf_ns)

    @property
    def is_success_status(self) -> bool:
        return self.status is not None and 200 <= self.status < 300


class ErrorDetails(VUSimBaseModel):
    """Uniform description of a failed request."""

    status: int | None = Field(default=None, description="HTTP status code.")
    code: int | None = Field(
        default=None,
        description="Application error code from the body, or the transport error code.",
    )
    message: str | None = Field(default=None, description="Human readable message.")
    method: str | None = Field(default=None, description="HTTP method.")
    url: str | None = Field(default=None, description="Request URL.")
    target: str | None = Field(
        default=None, description="Identity provider operation (x-amz-target)."
    )

    def __str__(self) -> str:
        target = f"(target={self.target}) " if self.target else ""
        return f"{self.method} {self.url} {target}{self.status} {self.code}: {self.message}"

    @classmethod
    def from_message(cls, message: str) -> "ErrorDetails":
        """Create an error that did not come from a server response."""
        return cls(message=message)


class RequestResult(VUSimBaseModel):
    """Result of a logical request after retries.

    `body` is the parsed JSON document. For backend calls the payload lives
    under `body["data"]`, exposed as :attr:`data`. Identity provider calls
    return their fields at the top level of `body`.
    """

    body: Any = Field(default=None, description="Parsed JSON response body.")
    error: ErrorDetails | None = Field(
        default=None, description="Error details if the request failed."
    )
    cancelled: bool = Field(
        default=False,
        description="True if the operation was abandoned by the client (e.g. matchmaking timed out).",
    )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def data(self) -> Any:
        if isinstance(self.body, dict):
            return self.body.get("data")
        return self.body

    @property
    def error_type(self) -> str | None:
        """The `__type` exception name of an identity provider error body."""
        if isinstance(self.body, dict):
            return self.body.get("__type")
        return None

    @classmethod
    def failure(cls, message: str) -> "RequestResult":
        return cls(error=ErrorDetails.from_message(message))
