"""BrooBot CLI commands."""
