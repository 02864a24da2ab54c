"""Command handlers for the interactive prompt and the one-shot CLI."""
