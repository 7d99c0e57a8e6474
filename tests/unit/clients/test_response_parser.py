# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for response normalization and error classification."""

import pytest

from vusim.clients import ErrorClassifier, parse_response
from vusim.common.constants import HTTP_TIMEOUT_ERROR_CODE
from vusim.common.enums import ErrCode, ErrorKind
from vusim.common.models import ErrorDetails, HttpResponse, RequestResult

# =============================================================================
# Helper Functions
# =============================================================================


def make_response(status: int | None = 200, body: str = "", **kwargs) -> HttpResponse:
    return HttpResponse(
        method=kwargs.pop("method", "GET"),
        url=kwargs.pop("url", "http://backend.test/users"),
        status=status,
        body=body,
        **kwargs,
    )


# =============================================================================
# parse_response
# =============================================================================


class TestParseResponse:
    def test_json_object_body(self):
        result = parse_response(make_response(200, '{"data": {"count": 3}}'))
        assert result.ok
        assert result.data == {"count": 3}

    def test_json_array_body(self):
        result = parse_response(make_response(200, "  [1, 2]"))
        assert result.body == [1, 2]
        assert result.data == [1, 2]

    def test_non_json_body_is_ignored(self):
        result = parse_response(make_response(200, "OK"))
        assert result.ok
        assert result.body is None

    def test_application_error(self):
        result = parse_response(
            make_response(400, '{"error": {"code": 5, "msg": "User not found"}}', method="POST")
        )
        assert result.error == ErrorDetails(
            status=400,
            code=5,
            message="User not found",
            method="POST",
            url="http://backend.test/users",
        )

    def test_status_without_message(self):
        result = parse_response(make_response(503, "Service Unavailable"))
        assert result.error.status == 503
        assert result.error.code is None
        assert result.error.message == "HTTP status 503"

    def test_transport_error(self):
        result = parse_response(
            make_response(None, error="Connection refused", error_code=1212)
        )
        assert result.error.status is None
        assert result.error.code == 1212
        assert result.error.message == "Connection refused"

    def test_timeout_without_message(self):
        result = parse_response(make_response(None, error_code=HTTP_TIMEOUT_ERROR_CODE))
        assert result.error.code == HTTP_TIMEOUT_ERROR_CODE
        assert result.error.message == "Timeout"

    def test_body_code_wins_over_transport_code(self):
        result = parse_response(
            make_response(400, '{"error": {"code": 12}}', error_code=1000)
        )
        assert result.error.code == 12

    def test_malformed_json(self):
        result = parse_response(make_response(200, "{not json"))
        assert result.error is not None
        assert result.error.message.startswith("Malformed JSON response")
        assert ErrorClassifier.is_fatal(result.error)

    def test_identity_target_is_recorded(self):
        result = parse_response(
            make_response(
                400,
                '{"__type": "TooManyRequestsException"}',
                request_headers={"X-Amz-Target": "AWSCognitoIdentityProviderService.SignUp"},
            )
        )
        assert result.error.target == "AWSCognitoIdentityProviderService.SignUp"
        assert result.error_type == "TooManyRequestsException"
        assert "(target=AWSCognitoIdentityProviderService.SignUp)" in str(result.error)


# =============================================================================
# ErrorClassifier
# =============================================================================


class TestErrorClassifier:
    @pytest.mark.parametrize(
        "error,expected",
        [
            (ErrorDetails(message="boom"), ErrorKind.FATAL),
            (ErrorDetails(status=400), ErrorKind.FATAL),
            (ErrorDetails(code=1212), ErrorKind.FATAL),
            (ErrorDetails(status=503, code=22), ErrorKind.TRANSIENT),
            (ErrorDetails(status=400, code=5), ErrorKind.APPLICATION),
        ],
    )
    def test_kind_of(self, error, expected):
        assert ErrorClassifier.kind_of(error) == expected

    def test_known_code_is_typed(self):
        classification = ErrorClassifier().classify(ErrorDetails(status=400, code=5))
        assert classification.code is ErrCode.USER_NOT_FOUND
        assert classification.kind == ErrorKind.APPLICATION

    def test_unknown_code_stays_numeric(self):
        classification = ErrorClassifier().classify(ErrorDetails(status=400, code=999))
        assert classification.code == 999
        assert not isinstance(classification.code, ErrCode)

    def test_no_error_has_no_classification(self):
        assert ErrorClassifier().classify(None) is None

    def test_reason_from_message_prefix(self):
        classifier = ErrorClassifier({"User is already matched.": "already_matched"})
        error = ErrorDetails(status=400, code=12, message="User is already matched. Try later")
        assert classifier.has_reason(error, "already_matched")
        assert not classifier.has_reason(ErrorDetails(status=400, code=12), "already_matched")

    @pytest.mark.parametrize(
        "error,expected",
        [
            (None, False),
            (ErrorDetails(status=None), True),
            (ErrorDetails(status=500), True),
            (ErrorDetails(status=499), False),
        ],
    )
    def test_is_transient(self, error, expected):
        assert ErrorClassifier.is_transient(error) is expected

    def test_has_code(self):
        error = ErrorDetails(status=400, code=ErrCode.USER_NOT_FOUND)
        assert ErrorClassifier.has_code(error, ErrCode.USER_NOT_FOUND)
        assert not ErrorClassifier.has_code(error, ErrCode.ALREADY_PLAYING)
        assert not ErrorClassifier.has_code(None, ErrCode.USER_NOT_FOUND)

    @pytest.mark.parametrize(
        "status,error_type,expected",
        [
            (400, "TooManyRequestsException", True),
            (400, "NotAuthorizedException", False),
            (429, "TooManyRequestsException", False),
        ],
    )
    def test_is_identity_throttle(self, status, error_type, expected):
        result = RequestResult(
            body={"__type": error_type}, error=ErrorDetails(status=status)
        )
        assert ErrorClassifier.is_identity_throttle(result) is expected
