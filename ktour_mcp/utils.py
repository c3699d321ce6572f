import logging
import os
import re
import time
import uuid
from typing import Optional
from pythonjsonlogger import jsonlogger

# ---------- logger JSON ----------
logger = logging.getLogger("ktour_mcp")
_handler = logging.StreamHandler()  # stderr; stdout belongs to the MCP stdio channel
_formatter = jsonlogger.JsonFormatter("%(levelname)s %(message)s %(asctime)s %(name)s")
_handler.setFormatter(_formatter)


def _env_log_level(default: int = logging.INFO) -> int:
    level = logging.getLevelName(os.getenv("TOUR_API_LOG_LEVEL", "").strip().upper())
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else default


logger.setLevel(_env_log_level())
logger.addHandler(_handler)


def new_request_id() -> str:
    return uuid.uuid4().hex


class Timer:
    def __enter__(self):
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, *_):
        self.elapsed_ms = (time.perf_counter() - self.t0) * 1000.0


# ---------- text helpers ----------
_TAG_RE = re.compile(r"<[^>]*>")
_YMD_RE = re.compile(r"(\d{4})(\d{2})(\d{2})")


def strip_tags(s: str) -> str:
    """Remove every <...> markup tag (TourAPI embeds <br> and <a href> in text fields)."""
    return _TAG_RE.sub("", s)


def compose_address(addr1: Optional[str], addr2: Optional[str] = None) -> str:
    addr1 = addr1 or ""
    return f"{addr1} {addr2}" if addr2 else addr1


def format_ymd(s: str) -> str:
    """
    Regroup a compact date into hyphenated form: '20240101' -> '2024-01-01'.
    Digits are regrouped as-is (no calendar validation); only the first 8-digit run is touched.
    """
    return _YMD_RE.sub(r"\1-\2-\3", s, count=1)
