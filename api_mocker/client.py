from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

import httpx

from api_mocker.codec import decode_response, encode_request, json_response, json_string
from api_mocker.errors import InvalidRequest, ServerError, TransportError, VerificationFailure
from api_mocker.models import ExpectedRequest, ResultSet

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2}).{0,2}")
_CONTROL_CHAR = re.compile(r"[\x00-\x1f\x7f]")
_AUTHORITY = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://([^/?#]*)")


class Client:
    """
    Talks to a remote mock server over {base_path}/mocks.

    Every call is a single blocking round trip on a fresh httpx.Client; the
    instance holds nothing mutable and can be shared between threads.
    """

    def __init__(self, base_path: str, transport: Optional[httpx.BaseTransport] = None):
        self._base_path = base_path
        self._transport = transport

    @property
    def base_path(self) -> str:
        return self._base_path

    def __repr__(self) -> str:
        return f"Client(base_path={self._base_path!r})"

    def results(self) -> ResultSet:
        """Expected requests that were never matched and requests nobody expected."""
        response = self._send("GET")
        if response.status_code != 200:
            raise ServerError("failed to get mocks", status_code=response.status_code)
        return decode_response(response)

    def verify(self) -> None:
        results = self.results()
        if results.is_clean():
            return

        errs: List[str] = []
        if results.expected:
            errs.append(f"missing {len(results.expected)} expected calls: {json_string(results.expected)}")
        if results.unexpected:
            errs.append(f"{len(results.unexpected)} unexpected calls: {json_string(results.unexpected)}")

        raise VerificationFailure("\n".join(errs), results)

    def expect(self, req: ExpectedRequest) -> None:
        response = self._send(
            "POST",
            content=encode_request(req),
            headers={"content-type": "application/json"},
        )
        if response.status_code == 201:
            return
        raise ServerError(f"failed to create mock {json_response(response)}", status_code=response.status_code)

    def clear(self) -> None:
        response = self._send("DELETE")
        if response.status_code != 204:
            raise ServerError("failed to clear mocks", status_code=response.status_code)

    def _mocks_url(self) -> httpx.URL:
        raw = f"{self._base_path}/mocks"
        # httpx is laxer than a strict URL parser and would defer these to the transport
        if raw.startswith(":"):
            raise InvalidRequest(f"parse {raw}: missing protocol scheme")
        if _CONTROL_CHAR.search(raw):
            raise InvalidRequest(f"parse {raw}: invalid control character in URL")
        bad_escape = _BAD_ESCAPE.search(raw)
        if bad_escape:
            raise InvalidRequest(f'parse {raw}: invalid URL escape "{bad_escape.group()}"')
        if not _SCHEME.match(raw) and not raw.startswith("/") and ":" in raw.split("/", 1)[0]:
            raise InvalidRequest(f"parse {raw}: first path segment in URL cannot contain colon")
        authority = _AUTHORITY.match(raw)
        bad_host = re.search(r"\s", authority.group(1).rpartition("@")[2]) if authority else None
        if bad_host:
            raise InvalidRequest(f'parse {raw}: invalid character "{bad_host.group()}" in host name')
        try:
            return httpx.URL(raw)
        except httpx.InvalidURL as exc:
            raise InvalidRequest(str(exc)) from exc

    def _send(
        self,
        method: str,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        url = self._mocks_url()
        try:
            with httpx.Client(transport=self._transport) as client:
                response = client.request(method, url, content=content, headers=headers)
        except httpx.RequestError as exc:
            raise TransportError(str(exc)) from exc

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response
