"""Report model and output writers."""
