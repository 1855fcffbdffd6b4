"""Command-line driver for saladplate."""
