"""Command line interface for the Intcode VM."""
