"""Entry validation and ordering."""
