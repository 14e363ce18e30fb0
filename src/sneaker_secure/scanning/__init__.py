"""
Scanner payload validation.
"""

from .payload import HistoryEntry, ScanPayload, parse_scan_payload

__all__ = ["HistoryEntry", "ScanPayload", "parse_scan_payload"]
