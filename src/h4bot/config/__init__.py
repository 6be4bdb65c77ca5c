"""Settings and dependency container."""
