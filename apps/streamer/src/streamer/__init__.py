"""Streamer - print BitMEX realtime events to the console.

Runs a public session and an optional private session from one YAML config
and renders every event with rich.
"""

__version__ = "0.1.0"
