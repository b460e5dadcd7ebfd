"""Interactive smallest enclosing circle explorer."""
