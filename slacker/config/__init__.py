"""Runtime configuration."""

from .settings import ConfigError, Settings, cfg, parse_bind, parse_command_tokens

__all__ = ["ConfigError", "Settings", "cfg", "parse_bind", "parse_command_tokens"]
