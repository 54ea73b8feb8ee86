"""User service command line interface."""
