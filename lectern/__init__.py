"""HTTP boundary for Librarium."""
