import os
import sys
from pathlib import Path
from typing import Final

APP_NAME: Final[str] = "BarcodeGenerator"
APP_TITLE: Final[str] = "Barcode Test Assistant"
CONFIG_FILENAME: Final[str] = "config.json"

# Seed shown in the rule field when nothing was restored from disk.
DEFAULT_RULE: Final[str] = "EXEM-5601350S000000000010"

DEFAULT_WINDOW_WIDTH: Final[float] = 500.0
DEFAULT_WINDOW_HEIGHT: Final[float] = 400.0
# Stored window sizes at or below this are ignored on restore.
MIN_RESTORED_EXTENT: Final[float] = 100.0

# Display labels for the format selector, in selector index order.
FORMAT_LABELS: Final[tuple[str, ...]] = (
    "Barcode (Code 128)",
    "QR Code",
    "Data Matrix",
)


def get_user_data_dir() -> Path:
    """Return the per-user local application data directory.

    ``%LOCALAPPDATA%`` on Windows, ``$XDG_DATA_HOME`` or ``~/.local/share``
    elsewhere.
    """
    if sys.platform.startswith("win"):
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".local" / "share"


class Paths:
    """Project path constants"""
    if getattr(sys, "frozen", False):
        # sys.executable points into a temporary _MEI directory; use sys.argv[0] for the real executable path
        BASE_DIR: Final[str] = os.path.dirname(os.path.abspath(sys.argv[0]))
    else:
        BASE_DIR: Final[str] = str(Path(__file__).resolve().parents[2])
    RES_DIR: Final[str] = os.path.join(BASE_DIR, "res")
    CONFIG_DIR: Final[str] = str(get_user_data_dir() / APP_NAME)
    CONFIG_FILE: Final[str] = os.path.join(CONFIG_DIR, CONFIG_FILENAME)
    ICON_FILE: Final[str] = os.path.join(RES_DIR, "logo.ico")
