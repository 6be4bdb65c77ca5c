"""discord.py implementations of the application ports."""
