"""Command-line interface for agentctl."""
