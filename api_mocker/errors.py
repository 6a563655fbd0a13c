from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from api_mocker.models import ResultSet


class MockerError(Exception):
    """Base class for every failure raised by the client; `code` tells them apart."""

    code = "MOCKER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(MockerError):
    code = "INVALID_REQUEST"


class TransportError(MockerError):
    code = "TRANSPORT_ERROR"


class ServerError(MockerError):
    code = "SERVER_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(MockerError):
    code = "DECODE_ERROR"


class VerificationFailure(MockerError):
    code = "VERIFICATION_FAILURE"

    def __init__(self, message: str, results: "ResultSet"):
        super().__init__(message)
        self.results = results
