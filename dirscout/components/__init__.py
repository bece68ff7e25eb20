"""Views driven by the dispatch loop."""
