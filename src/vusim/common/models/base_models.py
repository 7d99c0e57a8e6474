# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VUSimBaseModel(BaseModel):
    """Base model for all vusim models."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="allow")


class BackendModel(VUSimBaseModel):
    """Base model for documents returned by the game backend.

    The backend speaks camelCase JSON. Unknown fields are kept so that a
    snapshot can be logged verbatim when something looks wrong.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )
