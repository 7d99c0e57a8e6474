# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any

import orjson

from vusim.clients.response_parser import parse_response
from vusim.common.config.simulation_config import COGNITO_ENDPOINT
from vusim.common.mixins import VUSimLoggerMixin
from vusim.common.models import RequestResult
from vusim.transports import HttpTransportProtocol

_TARGET_PREFIX = "AWSCognitoIdentityProviderService."
_API_VERSION = "2016-04-18"
_CONTENT_TYPE = "application/x-amz-json-1.1"

TEST_PASSWORD = "Password1!"
TEST_CHALLENGE_ANSWER = "123456"


class CognitoIdentityProvider(VUSimLoggerMixin):
    """Identity provider speaking the AWS Cognito JSON protocol.

    Test accounts use a fixed password and a custom auth challenge whose answer
    the test stack always accepts.
    """

    def __init__(
        self,
        transport: HttpTransportProtocol,
        client_id: str,
        endpoint: str = COGNITO_ENDPOINT,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.transport = transport
        self.client_id = client_id
        self.endpoint = endpoint

    async def _call(self, operation: str, payload: dict[str, Any]) -> RequestResult:
        headers = {
            "Content-Type": _CONTENT_TYPE,
            "x-amz-api-version": _API_VERSION,
            "x-amz-target": _TARGET_PREFIX + operation,
        }
        response = await self.transport.request(
            "POST",
            self.endpoint,
            headers,
            body=orjson.dumps({"ClientId": self.client_id, **payload}),
        )
        self.trace(
            lambda: f"POST {self.endpoint} ({operation}) {response.status}: {response.body}"
        )
        return parse_response(response)

    async def sign_up(self, phone: str) -> RequestResult:
        return await self._call(
            "SignUp",
            {
                "Username": phone,
                "Password": TEST_PASSWORD,
                "UserAttributes": [{"Name": "phone_number", "Value": phone}],
            },
        )

    async def initiate_auth(self, phone: str) -> RequestResult:
        return await self._call(
            "InitiateAuth",
            {"AuthFlow": "CUSTOM_AUTH", "AuthParameters": {"USERNAME": phone}},
        )

    async def respond_to_challenge(self, phone: str, session: str | None) -> RequestResult:
        return await self._call(
            "RespondToAuthChallenge",
            {
                "Session": session,
                "ChallengeName": "CUSTOM_CHALLENGE",
                "ChallengeResponses": {
                    "USERNAME": phone,
                    "ANSWER": TEST_CHALLENGE_ANSWER,
                },
            },
        )

    async def refresh(self, phone: str, refresh_token: str) -> RequestResult:
        return await self._call(
            "InitiateAuth",
            {
                "AuthFlow": "REFRESH_TOKEN_AUTH",
                "AuthParameters": {"USERNAME": phone, "REFRESH_TOKEN": refresh_token},
            },
        )
