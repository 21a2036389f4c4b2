from __future__ import annotations

from ._exceptions import AllocationError, ContractViolation


class RequestContext:
    """
    State for one HTTP exchange: the target URL, the status code reported by
    the engine and the response body accumulated so far.

    ``status_code`` is 0 until a transfer completes. The body only grows while
    a transfer runs and is cleared by :meth:`reset` at the start of the next
    one.
    """

    def __init__(self, url: str | None) -> None:
        self._url = url
        self.status_code = 0
        self._body = bytearray()
        self._in_flight = False
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"<RequestContext url={self._url!r} status_code={self.status_code} "
            f"body_length={self.body_length}>"
        )

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def body(self) -> bytes:
        """A copy of the bytes received so far."""
        return bytes(self._body)

    @property
    def body_length(self) -> int:
        return len(self._body)

    @property
    def content(self) -> bytes:
        return bytes(self._body)

    @property
    def text(self) -> str:
        return self._body.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        """``False`` when no usable response was obtained."""
        return self.status_code != 0

    @property
    def closed(self) -> bool:
        return self._closed

    def append(self, chunk: bytes) -> None:
        try:
            self._body += chunk
        except MemoryError as exc:
            raise AllocationError(
                f"Could not grow response buffer past {self.body_length} bytes"
            ) from exc

    def as_c_string(self) -> bytes:
        """Return the body followed by a single NUL terminator."""
        return bytes(self._body) + b"\0"

    def reset(self) -> None:
        self.status_code = 0
        self._body.clear()

    def begin_transfer(self) -> None:
        if self._closed:
            raise ContractViolation("Request context has been closed")
        if not self._url:
            raise ContractViolation("No URL provided")
        if self._in_flight:
            raise ContractViolation(
                "Request context is already bound to a transfer in flight"
            )
        self._in_flight = True
        self.reset()

    def end_transfer(self, status_code: int) -> None:
        self.status_code = status_code
        self._in_flight = False

    def release(self) -> None:
        self._body = bytearray()
        self._in_flight = False
        self._closed = True
