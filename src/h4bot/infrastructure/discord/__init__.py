"""Discord integration."""
