"""Account, subscription and push delivery services."""
