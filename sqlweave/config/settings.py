"""
settings.py

This module provides application configuration management for sqlweave.

Features:
- Centralized application configuration using Pydantic settings
- Constants for application-wide use

Usage:
Import appsettings for application configuration values.
"""

from typing import Final
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console()


class App(BaseSettings):
    """
    Application settings model.

    Provides a centralized configuration for template expansion behavior.
    Settings can be overridden through environment variables with SQW_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        varMarker: Prefix marking a template token as a variable reference
        strictDelimiters: Fail on unbalanced scope delimiters instead of
            repairing them
        maxDepth: Deepest scope nesting accepted by the parser
    """

    beQuiet: bool = True
    varMarker: str = Field(default=".", min_length=1)
    strictDelimiters: bool = True
    maxDepth: int = Field(default=200, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="SQW_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


# Create the application settings instance
appsettings: Final[App] = App()
