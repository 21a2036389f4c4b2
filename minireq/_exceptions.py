"""
Exception hierarchy:

    RequestsError
    ├── ContractViolation
    │   └── EngineNotInitialized
    ├── AllocationError
    └── TransferError
        └── TransferAborted
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    import httpx

    from ._models import RequestContext


class RequestsError(Exception):
    """Base class for every error raised by minireq."""


class ContractViolation(RequestsError, ValueError):
    """The caller broke a precondition (missing URL, odd key/value data...)."""


class EngineNotInitialized(ContractViolation):
    pass


class AllocationError(RequestsError, MemoryError):
    """The response buffer could not be grown."""


class TransferError(RequestsError):
    """
    The transfer engine failed to complete the exchange.

    The context keeps whatever bytes arrived before the failure, and its
    status code stays 0.
    """

    def __init__(
        self,
        message: str,
        *,
        request: httpx.Request | None = None,
        context: RequestContext | None = None,
    ) -> None:
        super().__init__(message)
        self._request = request
        self.context = context

    @property
    def request(self) -> httpx.Request:
        if self._request is None:
            raise RuntimeError("The .request property has not been set.")
        return self._request

    @request.setter
    def request(self, request: httpx.Request) -> None:
        self._request = request


class TransferAborted(TransferError):
    """The write function did not consume a whole chunk."""
