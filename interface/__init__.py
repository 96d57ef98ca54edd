"""Command-line and HTTP front ends."""
