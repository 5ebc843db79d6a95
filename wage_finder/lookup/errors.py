"""
Exception hierarchy for the wage lookup client.

Everything is rooted at WageFinderError so the CLI can report any failure
as a single error line.
"""


class WageFinderError(Exception):
    """Base exception for lookup errors."""


class WageDataError(WageFinderError):
    """Raised when the manifest or a dataset cannot be fetched, decompressed or parsed."""


class InvalidSalaryError(WageFinderError):
    """Raised when the salary input is not a positive number."""
