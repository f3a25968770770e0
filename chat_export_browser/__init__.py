"""Terminal browser for chat export archives."""
