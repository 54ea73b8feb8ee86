"""HTTP API for the user service."""
