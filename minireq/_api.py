from __future__ import annotations

import logging
import typing

from ._accumulate import write_function_for
from ._engine import Engine, HeaderList, Session, get_engine
from ._exceptions import ContractViolation, TransferError
from ._models import RequestContext
from ._urlencode import url_encode
from ._useragent import user_agent

logger = logging.getLogger("minireq.api")

Data = typing.Optional[typing.Sequence[str]]
Headers = typing.Optional[typing.Sequence[str]]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

SUBMIT_METHODS = ("POST", "PUT")


def init(url: str, *, engine: Engine | None = None) -> tuple[Session, RequestContext]:
    """
    Open a session and a request context bound to ``url``.

    Uses the engine created by :func:`~minireq.global_init` unless one is
    passed explicitly. Release both with :func:`close` once the results have
    been read.
    """
    if engine is None:
        engine = get_engine()
    context = RequestContext(url)
    return engine.open_session(), context


def close(session: Session, context: RequestContext) -> None:
    session.close()
    context.release()


def parse_header(header: str) -> tuple[str, str]:
    """Parse a raw ``'Name: value'`` header line."""
    if ":" not in header:
        raise ContractViolation(
            f"Invalid header format: {header!r}. Expected 'Name: value'."
        )
    name, _, value = header.partition(":")
    return name.strip(), value.strip()


def build_headers(has_body: bool, headers: Headers = None) -> HeaderList:
    """
    Assemble the outgoing header list for a POST or PUT.

    Without a body and without caller headers an explicit
    ``Content-Length: 0`` is sent. Caller headers are kept in order, and with
    a body they suppress the default form ``Content-Type`` when they carry
    their own.
    """
    header_list: HeaderList = []
    if headers is not None:
        header_list.extend(parse_header(header) for header in headers)

    if has_body:
        if not any(name.lower() == "content-type" for name, _ in header_list):
            header_list.insert(0, ("Content-Type", FORM_CONTENT_TYPE))
    elif headers is None:
        header_list.append(("Content-Length", "0"))
    return header_list


def _execute(
    session: Session,
    context: RequestContext,
    method: str,
    *,
    content: bytes | None = None,
    headers: HeaderList | None = None,
    agent: str | None = None,
) -> RequestContext:
    context.begin_transfer()
    status_code = 0
    try:
        status_code = session.perform(
            method,
            typing.cast(str, context.url),
            write_function=write_function_for(context),
            content=content,
            headers=headers,
            user_agent=agent,
        )
    except TransferError as exc:
        exc.context = context
        raise
    finally:
        context.end_transfer(status_code)
    return context


def get(session: Session, context: RequestContext) -> RequestContext:
    """
    Perform a GET request against ``context.url``.

    The body is accumulated into ``context.body`` and the status code stored
    in ``context.status_code``. The engine's default User-Agent is used.
    """
    return _execute(session, context, "GET")


def submit(
    session: Session,
    context: RequestContext,
    method: str,
    data: Data = None,
    headers: Headers = None,
) -> RequestContext:
    """
    Perform a POST or PUT request.

    ``data`` is a flat ``[key, value, key, value, ...]`` sequence, sent
    form-encoded with :func:`~minireq.url_encode`. ``headers`` are raw
    ``'Name: value'`` lines appended in order. Usually called through
    :func:`post`, :func:`put` and their ``_with_headers`` variants.
    """
    if method not in SUBMIT_METHODS:
        raise ContractViolation(
            f"Invalid submit method {method!r}; expected one of {SUBMIT_METHODS}"
        )
    if not context.url:
        raise ContractViolation("No URL provided")

    content = None
    if data is not None:
        content = url_encode(data).encode("ascii")
    header_list = build_headers(content is not None, headers)

    logger.debug(
        "%s %s with %d header(s), %s",
        method,
        context.url,
        len(header_list),
        "no body" if content is None else f"{len(content)} byte body",
    )
    return _execute(
        session,
        context,
        method,
        content=content,
        headers=header_list,
        agent=user_agent(),
    )


def post(session: Session, context: RequestContext, data: Data = None) -> RequestContext:
    return submit(session, context, "POST", data)


def put(session: Session, context: RequestContext, data: Data = None) -> RequestContext:
    return submit(session, context, "PUT", data)


def post_with_headers(
    session: Session,
    context: RequestContext,
    data: Data = None,
    headers: Headers = None,
) -> RequestContext:
    return submit(session, context, "POST", data, headers)


def put_with_headers(
    session: Session,
    context: RequestContext,
    data: Data = None,
    headers: Headers = None,
) -> RequestContext:
    return submit(session, context, "PUT", data, headers)
