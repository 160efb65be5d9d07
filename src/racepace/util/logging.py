# racepace/util/logging.py
from __future__ import annotations

import datetime
import sys
from typing import TextIO

def log(msg: str, *, file: TextIO | None = None) -> None:
    """Print a timestamped log line (local time with timezone)."""
    ts = datetime.datetime.now().astimezone().isoformat(timespec="seconds")
    print(f"{ts}  {msg}", file=file if file is not None else sys.stdout)
