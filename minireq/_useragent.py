from __future__ import annotations

import platform

from .__version__ import __title__, __version__


def user_agent(product: str = __title__, version: str = __version__) -> str:
    """Return e.g. ``"minireq/0.1.0 Linux/6.8.0-45-generic"``."""
    uname = platform.uname()
    return f"{product}/{version} {uname.system}/{uname.release}"
