"""Command handlers used by the Typer CLI."""
