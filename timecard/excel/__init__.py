"""Spreadsheet I/O boundary: raw grid reader and export renderer."""
