from __future__ import annotations

from .server import TesseraServer, run

__all__ = ["TesseraServer", "run"]
