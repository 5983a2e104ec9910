from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory that holds the persisted
configuration and the optional log file, on Windows and Unix-like
systems alike.
"""

import os

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "AstViz"
UNIX_APP_DIR_NAME = ".astviz"
DATA_DIR_ENV = "ASTVIZ_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir(create: bool = True) -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Precedence:
    - $ASTVIZ_HOME when set.
    - Windows: %LOCALAPPDATA%/AstViz
    - Linux/Mac: ~/.astviz

    Args:
        create: Create the directory hierarchy when missing.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = os.environ.get(DATA_DIR_ENV, "").strip()

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    if create:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError:
            # reported later by whoever writes into it
            pass

    return os.path.abspath(path)


def ensure_parent_dir(path: str) -> None:
    """Create the parent directory hierarchy of a file path."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
