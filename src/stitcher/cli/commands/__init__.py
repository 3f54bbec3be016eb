"""CLI commands (one module per subcommand)."""
