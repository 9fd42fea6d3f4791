"""zuora: object mapping client for the Zuora SOAP billing API."""

from __future__ import annotations

__version__ = "1.3.0"
