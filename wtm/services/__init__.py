"""Services used by the sync and push commands."""
