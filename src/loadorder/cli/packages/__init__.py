"""Package discovery and resolution commands."""
