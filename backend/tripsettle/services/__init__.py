"""Pure computation services."""
