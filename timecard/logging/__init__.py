"""Labeled application logging and the JSON Lines error log."""
