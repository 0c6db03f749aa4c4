from __future__ import annotations

from .client import TesseraClient

__all__ = ["TesseraClient"]
