"""Search-based code intelligence engine."""
