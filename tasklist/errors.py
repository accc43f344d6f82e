"""
Request Errors
==============
Two kinds of failure reach the HTTP boundary:

    RequestError    caused by the client; carries the HTTP status to send.
                    The body is "<code> <message>".
    anything else   a bug or unexpected condition; logged server-side and
                    answered with a 500 "internal server error".
"""

from __future__ import annotations

from http import HTTPStatus

INTERNAL_ERROR_MESSAGE = "internal server error"


class RequestError(Exception):
    """A client-facing error with an explicit HTTP status code."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = int(code)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code} {self.message}"


def bad_request(message: str) -> RequestError:
    return RequestError(HTTPStatus.BAD_REQUEST, message)


def not_found(message: str) -> RequestError:
    return RequestError(HTTPStatus.NOT_FOUND, message)
