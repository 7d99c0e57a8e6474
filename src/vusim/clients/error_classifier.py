# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Typed classification of request errors.

The backend's contract is its numeric application error code. Message text is
only consulted, through configured prefixes, for conditions the contract has
no dedicated code for (such as "User is already matched.").
"""

from pydantic import ConfigDict, Field

from vusim.common.enums import ErrCode, ErrorKind
from vusim.common.models import ErrorDetails, RequestResult, VUSimBaseModel

IDENTITY_THROTTLE_STATUS = 400
IDENTITY_THROTTLE_TYPE = "TooManyRequestsException"
IDENTITY_USER_EXISTS_TYPE = "UsernameExistsException"


class ErrorClassification(VUSimBaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(..., description="How the failure should be treated.")
    code: ErrCode | int | None = Field(
        default=None, description="Application error code, typed when known."
    )
    reason: str | None = Field(
        default=None, description="Reason from a configured message prefix."
    )


class ErrorClassifier:
    """Classifies request errors as transient, application or fatal."""

    def __init__(self, message_prefixes: dict[str, str] | None = None) -> None:
        self.message_prefixes = dict(message_prefixes or {})

    @staticmethod
    def kind_of(error: ErrorDetails) -> ErrorKind:
        if error.status is None or error.code is None:
            return ErrorKind.FATAL
        if error.status >= 500:
            return ErrorKind.TRANSIENT
        return ErrorKind.APPLICATION

    def classify(self, error: ErrorDetails | None) -> ErrorClassification | None:
        if error is None:
            return None
        code: ErrCode | int | None = error.code
        if code is not None:
            try:
                code = ErrCode(code)
            except ValueError:
                pass
        return ErrorClassification(
            kind=self.kind_of(error),
            code=code,
            reason=self._reason(error.message),
        )

    def _reason(self, message: str | None) -> str | None:
        if not message:
            return None
        for prefix, reason in self.message_prefixes.items():
            if message.startswith(prefix):
                return reason
        return None

    @classmethod
    def is_fatal(cls, error: ErrorDetails | None) -> bool:
        """Client side or unattributable errors: no HTTP status or no application code."""
        return error is not None and cls.kind_of(error) == ErrorKind.FATAL

    @staticmethod
    def is_transient(error: ErrorDetails | None) -> bool:
        """No usable status, or a server side failure."""
        return error is not None and (error.status is None or error.status >= 500)

    @staticmethod
    def has_code(error: ErrorDetails | None, code: ErrCode) -> bool:
        return error is not None and error.code == code

    def has_reason(self, error: ErrorDetails | None, reason: str) -> bool:
        classification = self.classify(error)
        return classification is not None and classification.reason == reason

    @staticmethod
    def is_identity_throttle(result: RequestResult) -> bool:
        return (
            result.error is not None
            and result.error.status == IDENTITY_THROTTLE_STATUS
            and result.error_type == IDENTITY_THROTTLE_TYPE
        )
