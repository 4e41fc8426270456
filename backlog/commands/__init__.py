"""Subcommand implementations for the backlog CLI."""
