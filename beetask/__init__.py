"""Configuration, table rendering, formatting helpers and action registry for a terminal task manager."""

__version__ = "0.1.0"

__all__ = ["actions", "cli_config", "core_config", "formatting", "table"]