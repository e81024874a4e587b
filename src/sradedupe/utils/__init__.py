"""Common utility functions for sradedupe."""

from sradedupe.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]
