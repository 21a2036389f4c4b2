# ruff: noqa: I001
from .__version__ import __description__, __title__, __version__
from ._accumulate import accumulate
from ._api import (
    close,
    get,
    init,
    post,
    post_with_headers,
    put,
    put_with_headers,
    submit,
)
from ._engine import Engine, Session, get_engine, global_cleanup, global_init
from ._exceptions import (
    AllocationError,
    ContractViolation,
    EngineNotInitialized,
    RequestsError,
    TransferAborted,
    TransferError,
)
from ._models import RequestContext
from ._urlencode import escape, url_encode
from ._useragent import user_agent

try:
    from .cli import main
except ImportError:

    def main() -> None:  # type: ignore[misc]
        import sys

        print(
            'The "minireq" command requires the CLI extra. '
            'Install it with: pip install "minireq[cli]"',
            file=sys.stderr,
        )
        sys.exit(1)


_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
