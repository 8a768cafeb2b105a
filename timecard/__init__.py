"""Time card attendance analyzer.

Ingests raw time-and-attendance export sheets and produces per-day attendance
records plus per-employee summaries.
"""

__version__ = "0.1.0"
