"""Parsers for process, memory, mount and system records from the Linux /proc filesystem."""

__version__ = "0.1.0"