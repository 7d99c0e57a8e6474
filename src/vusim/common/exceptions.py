# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class VUSimError(Exception):
    """Base class for all exceptions raised by vusim."""

    def __str__(self) -> str:
        """Return the string representation of the exception with the class name."""
        return super().__str__()


class ConfigurationError(VUSimError):
    """Exception raised when something fails to configure, or there is a configuration error."""


class DispatchError(VUSimError):
    """Exception raised when an action set cannot select an action.

    This is always a programming error (an empty or all-zero action set, or a
    request for an action name the set does not contain) and ends the virtual
    user that raised it.
    """

    def __init__(self, dispatcher_name: str, message: str) -> None:
        self.dispatcher_name = dispatcher_name
        super().__init__(f"Dispatcher '{dispatcher_name}': {message}")


class InvalidStateError(VUSimError):
    """Exception raised when something is in an invalid state."""
