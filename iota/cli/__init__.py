"""Command line interface for the Iota grid engine."""
