"""Shared utilities: scratch space, frame I/O, pixel diff, subprocess."""
