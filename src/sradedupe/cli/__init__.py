"""Command-line interface for sradedupe."""
