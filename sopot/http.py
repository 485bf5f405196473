"""Small HTTP client: URL parsing, URI component encoding, sessions and requests."""

from __future__ import annotations

import http.client
import string
from dataclasses import dataclass
from typing import Optional, Union

_HTTP_PREFIX = "http://"
_HTTPS_PREFIX = "https://"
# The same characters that encodeURIComponent leaves untouched.
_UNRESERVED = frozenset((string.ascii_letters + string.digits + "-_.!~*'()").encode("ascii"))

_NETWORK_ERRORS = (OSError, http.client.HTTPException)


class HttpError(Exception):
    """Raised when an HTTP request cannot be made or does not succeed."""


@dataclass(frozen=True)
class ParsedUrl:
    ssl: bool
    host: str
    resource: str


def parse_http_url(url: str) -> ParsedUrl:
    """Split an http:// or https:// URL into its scheme, host and resource."""
    if url.startswith(_HTTPS_PREFIX):
        ssl, rest = True, url[len(_HTTPS_PREFIX):]
    elif url.startswith(_HTTP_PREFIX):
        ssl, rest = False, url[len(_HTTP_PREFIX):]
    else:
        raise ValueError(f"not an HTTP URL: {url!r}")
    host, slash, tail = rest.partition("/")
    return ParsedUrl(ssl, host, slash + tail)


def encode_uri_component(value: Union[str, bytes]) -> str:
    """Percent-encode every byte except ASCII letters, digits and -_.!~*'()."""
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return "".join(chr(byte) if byte in _UNRESERVED else f"%{byte:02X}" for byte in data)


def _as_bytes(data: Union[str, bytes]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


class HttpSession:
    """Shared settings for requests: the user agent and the timeouts in milliseconds."""

    def __init__(self, user_agent: str) -> None:
        self.user_agent = user_agent
        self.connect_timeout_ms: Optional[int] = None
        self.send_timeout_ms: Optional[int] = None
        self.receive_timeout_ms: Optional[int] = None

    @property
    def timeout(self) -> Optional[float]:
        """Socket timeout in seconds: the longest timeout that was set, or None."""
        values = [
            t for t in (self.connect_timeout_ms, self.send_timeout_ms, self.receive_timeout_ms) if t is not None
        ]
        return max(values) / 1000 if values else None

    def request(self, url: str, method: str = "GET") -> HttpRequest:
        return HttpRequest(url, method, self)


class HttpRequest:
    """One HTTP request; the body is sent whole by send() or streamed after begin_body()."""

    def __init__(self, url: str, method: str, session: HttpSession) -> None:
        parsed = parse_http_url(url)
        if not parsed.host:
            raise HttpError(f"URL has no host: {url!r}")
        connection_class = http.client.HTTPSConnection if parsed.ssl else http.client.HTTPConnection
        try:
            self._conn = connection_class(parsed.host, timeout=session.timeout)
        except _NETWORK_ERRORS as exc:
            raise HttpError(str(exc)) from exc
        self._method = method
        self._resource = parsed.resource or "/"
        self._headers: list[tuple[str, str]] = []
        if session.user_agent:
            self._headers.append(("User-Agent", session.user_agent))
        self._in_body = False
        self._response: Optional[http.client.HTTPResponse] = None

    def __enter__(self) -> HttpRequest:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def add_header(self, name: str, value: str) -> None:
        self.add_raw_headers(f"{name}: {value}")

    def add_raw_headers(self, headers: str) -> None:
        """Add headers given as "Name: value" lines."""
        for line in headers.splitlines():
            if not line.strip():
                continue
            name, colon, value = line.partition(":")
            if not colon or not name.strip():
                raise ValueError(f"malformed header line: {line!r}")
            self._headers.append((name.strip(), value.strip()))

    def set_content_type(self, content_type: str) -> None:
        self.add_header("Content-Type", content_type)

    def _start(self, content_length: Optional[int] = None) -> None:
        try:
            self._conn.putrequest(self._method, self._resource, skip_accept_encoding=True)
            for name, value in self._headers:
                self._conn.putheader(name, value)
            if content_length is not None:
                self._conn.putheader("Content-Length", str(content_length))
            self._conn.endheaders()
        except _NETWORK_ERRORS as exc:
            raise HttpError(str(exc)) from exc

    def begin_body(self, total_body_size: int = 0) -> None:
        """Send the headers; the body then follows through write() and send()."""
        self._start(total_body_size)
        self._in_body = True

    def write(self, data: Union[str, bytes]) -> None:
        """Send a piece of the body started by begin_body()."""
        if not self._in_body:
            raise HttpError("request body has not been started")
        payload = _as_bytes(data)
        if not payload:
            return
        try:
            self._conn.send(payload)
        except _NETWORK_ERRORS as exc:
            raise HttpError(f"Unable to write {len(payload)} request body bytes") from exc

    def send(self, body: Union[str, bytes] = b"") -> None:
        """Finish the request and wait for the response; anything but status 200 raises HttpError."""
        payload = _as_bytes(body)
        if self._in_body:
            self.write(payload)
        else:
            self.add_header("Content-Length", str(len(payload)))
            self._start()
            if payload:
                try:
                    self._conn.send(payload)
                except _NETWORK_ERRORS as exc:
                    raise HttpError(str(exc)) from exc
        try:
            self._response = self._conn.getresponse()
        except _NETWORK_ERRORS as exc:
            raise HttpError(str(exc)) from exc
        if self._response.status != 200:
            raise HttpError(f"Invalid HTTP status code: {self._response.status}")

    def _require_response(self) -> http.client.HTTPResponse:
        if self._response is None:
            raise HttpError("request has not been sent")
        return self._response

    def read(self, size: int = 4096) -> bytes:
        """Read up to size bytes of the response body; b"" at its end."""
        response = self._require_response()
        try:
            return response.read(size)
        except _NETWORK_ERRORS as exc:
            raise HttpError(str(exc)) from exc

    def get_header(self, name: str) -> Optional[str]:
        """Return a response header, or None when the response has no such header."""
        return self._require_response().getheader(name)