"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use NEONLIGHT_ prefix (e.g., NEONLIGHT_DEBOUNCE_SECONDS=0.2).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.tokens import ColorScheme


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use NEONLIGHT_ prefix.

    Examples:
        NEONLIGHT_DEBOUNCE_SECONDS=0.15
        NEONLIGHT_MAX_HIGHLIGHT_LENGTH=100000
        NEONLIGHT_COLOR_SCHEME=dark
    """

    model_config = SettingsConfigDict(
        env_prefix="NEONLIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scheduler configuration
    debounce_seconds: float = Field(
        default=0.12,
        ge=0.0,
        description="Quiet period after the last edit before a highlight pass starts",
    )

    modal_retry_seconds: float = Field(
        default=0.3,
        ge=0.0,
        description="Retry delay while a modal dialog blocks the interactive thread",
    )

    worker_threads: int = Field(
        default=1,
        ge=1,
        description="Size of the tokenizer thread pool",
    )

    # Tokenizer configuration
    max_highlight_length: int = Field(
        default=200_000,
        gt=0,
        description="Documents longer than this many characters are not recoloured",
    )

    # Session defaults
    default_language: str = Field(
        default="plaintext",
        description="Language used when a file's language cannot be detected",
    )

    default_theme: str = Field(
        default="neon",
        description="Theme name (built-in or a directory under themes_dir)",
    )

    color_scheme: Literal["light", "dark"] = Field(
        default="light",
        description="Appearance the theme is resolved for",
    )

    themes_dir: str = Field(
        default="themes",
        description="Directory containing <name>/theme.yaml theme definitions",
    )

    def length_exceedsLimit(self, text: str) -> bool:
        """
        Check whether a document is too large to recolour.

        Args:
            text: Document text

        Returns:
            True if len(text) is strictly greater than max_highlight_length

        Example:
            >>> settings = AppSettings(max_highlight_length=3)
            >>> settings.length_exceedsLimit("abc"), settings.length_exceedsLimit("abcd")
            (False, True)
        """
        return len(text) > self.max_highlight_length

    def scheme_get(self) -> ColorScheme:
        """Return color_scheme as a ColorScheme member"""
        return ColorScheme(self.color_scheme)


# Singleton instance - import this in your code
appsettings = AppSettings()
