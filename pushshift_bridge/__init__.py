"""Pushshift bridge: authenticated search endpoint in front of a Pushshift-style provider."""

__version__ = "0.1.0"
