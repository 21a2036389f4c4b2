from __future__ import annotations

import functools
import typing

from ._models import RequestContext

WriteFunction = typing.Callable[[bytes], int]


def accumulate(context: RequestContext, chunk: bytes) -> int:
    """
    Append one chunk of response bytes to ``context``.

    Called by the session once per chunk received. Returns the number of bytes
    consumed; anything other than ``len(chunk)`` makes the session abort the
    transfer. Empty chunks are accepted and leave the body untouched.
    """
    if chunk:
        context.append(chunk)
    return len(chunk)


def write_function_for(context: RequestContext) -> WriteFunction:
    return functools.partial(accumulate, context)
