"""pinmap command-line interface."""
