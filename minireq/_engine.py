from __future__ import annotations

import atexit
import logging
import typing

import httpx

from ._accumulate import WriteFunction
from ._exceptions import (
    ContractViolation,
    EngineNotInitialized,
    TransferAborted,
    TransferError,
)

logger = logging.getLogger("minireq.engine")

DEFAULT_TIMEOUT = httpx.Timeout(5.0)

HeaderList = typing.List[typing.Tuple[str, str]]


class Session:
    """
    One transfer-engine handle, good for any number of sequential requests.

    Sessions are not safe to share between threads; give every concurrent
    request its own session and its own :class:`~minireq.RequestContext`.
    """

    def __init__(self, client: httpx.Client, engine: Engine | None = None) -> None:
        self._client = client
        self._engine = engine
        self._closed = False

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *args: typing.Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Session [{state}]>"

    @property
    def closed(self) -> bool:
        return self._closed

    def perform(
        self,
        method: str,
        url: str,
        *,
        write_function: WriteFunction,
        content: bytes | None = None,
        headers: HeaderList | None = None,
        user_agent: str | None = None,
    ) -> int:
        """
        Run one blocking request and feed the response body to
        ``write_function`` chunk by chunk, as received on the wire with any
        content-encoding left in place. Returns the response status code.
        """
        if self._closed:
            raise ContractViolation("Session has been closed")

        header_list: HeaderList = list(headers or [])
        if user_agent is not None and not any(
            name.lower() == "user-agent" for name, _ in header_list
        ):
            header_list.append(("User-Agent", user_agent))

        try:
            request = self._client.build_request(
                method, url, content=content, headers=header_list
            )
        except httpx.InvalidURL as exc:
            raise ContractViolation(f"Invalid URL {url!r}: {exc}") from exc

        logger.debug("%s %s", method, url)
        try:
            response = self._client.send(request, stream=True)
            try:
                if response.is_stream_consumed:
                    # Transports that build responses from in-memory content
                    # hand them over already read.
                    chunks: typing.Iterable[bytes] = [response.content]
                else:
                    chunks = response.iter_raw()
                for chunk in chunks:
                    consumed = write_function(chunk)
                    if consumed != len(chunk):
                        logger.warning(
                            "%s %s aborted: write function consumed %d of %d bytes",
                            method,
                            url,
                            consumed,
                            len(chunk),
                        )
                        raise TransferAborted(
                            f"Write function consumed {consumed} of {len(chunk)} bytes",
                            request=request,
                        )
            finally:
                response.close()
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransferError(
                f"{type(exc).__name__}: {exc}", request=request
            ) from exc

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response.status_code

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.close()
        if self._engine is not None:
            self._engine._forget(self)


class Engine:
    """
    Transfer-engine configuration shared by the sessions it opens.

    ``transport`` accepts any :class:`httpx.BaseTransport`, which is how the
    test suite plugs in :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        trust_env: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.trust_env = trust_env
        self.transport = transport
        self._sessions: set[Session] = set()
        self._closed = False

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *args: typing.Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Engine sessions={len(self._sessions)} closed={self._closed}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def open_session(self) -> Session:
        if self._closed:
            raise ContractViolation("Engine has been closed")
        client = httpx.Client(
            timeout=self.timeout,
            trust_env=self.trust_env,
            transport=self.transport,
            headers={"Accept-Encoding": "identity"},
            follow_redirects=False,
        )
        session = Session(client, engine=self)
        self._sessions.add(session)
        return session

    def _forget(self, session: Session) -> None:
        self._sessions.discard(session)

    def close(self) -> None:
        if self._closed:
            return
        for session in list(self._sessions):
            session.close()
        self._closed = True


_default_engine: Engine | None = None


def global_init(**config: typing.Any) -> Engine:
    """
    Create the process-wide engine used when no engine is passed to
    :func:`~minireq.init`. Torn down by :func:`global_cleanup`, which also runs
    at interpreter exit.
    """
    global _default_engine

    if _default_engine is not None:
        raise ContractViolation(
            "global_init() called twice without global_cleanup()"
        )
    _default_engine = Engine(**config)
    logger.info("minireq: engine initialized")
    return _default_engine


def global_cleanup() -> None:
    global _default_engine

    if _default_engine is None:
        return
    _default_engine.close()
    _default_engine = None
    logger.info("minireq: engine cleaned up")


def get_engine() -> Engine:
    if _default_engine is None:
        raise EngineNotInitialized(
            "No engine available; call minireq.global_init() first"
        )
    return _default_engine


atexit.register(global_cleanup)
