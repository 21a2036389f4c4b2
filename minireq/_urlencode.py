from __future__ import annotations

import re
import typing

from ._exceptions import ContractViolation

UNRESERVED_CHARACTERS = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)

UNRESERVED_REGEX = re.compile(f"[{re.escape(UNRESERVED_CHARACTERS)}]*")


def _percent_encode(char: str) -> str:
    return "".join(f"%{byte:02X}" for byte in char.encode("utf-8"))


def escape(string: str) -> str:
    """
    Percent-encode every character outside the unreserved set, UTF-8 first.

    Unlike a path or query quoter this keeps nothing else literal: ``=``,
    ``&``, ``/``, ``%`` and spaces are all escaped.
    """
    if UNRESERVED_REGEX.fullmatch(string):
        return string
    return "".join(
        c if c in UNRESERVED_CHARACTERS else _percent_encode(c) for c in string
    )


def join_pairs(data: typing.Sequence[str]) -> str:
    """
    Join ``[k0, v0, k1, v1, ...]`` into ``"k0=v0&k1=v1"``, keeping input order.
    """
    if len(data) % 2 != 0:
        raise ContractViolation(
            f"Key/value data must have an even number of items, got {len(data)}"
        )
    for item in data:
        if not isinstance(item, str):
            raise ContractViolation(
                f"Key/value data items must be str, got {type(item).__name__}"
            )
    return "&".join(f"{key}={value}" for key, value in zip(data[::2], data[1::2]))


def url_encode(data: typing.Sequence[str]) -> str:
    """
    Build a form-encoded string from a flat key/value sequence.

    The joined string is escaped as a whole, so the ``=`` and ``&`` delimiters
    come out as ``%3D`` and ``%26``:

    >>> url_encode(["name", "a b", "x", "1"])
    'name%3Da%20b%26x%3D1'
    """
    return escape(join_pairs(data))
