"""h4bot - a Discord bot that renames members in batches and plays audio in voice channels."""

__version__ = "0.1.0"
