"""Command line interface for BINSTRING."""
