"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DCECOMP_ prefix (e.g., DCECOMP_WORKERS=4).

List settings are given as JSON (e.g., DCECOMP_SCRIPT_EXTENSIONS='[".js", ".mjs"]').
Settings can also be loaded from a .env file in the project root.
"""

from pathlib import PurePath
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.parser import SourceKind


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DCECOMP_ prefix.

    Examples:
        DCECOMP_MARKER=#DCECOMP
        DCECOMP_WORKERS=4
        DCECOMP_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="DCECOMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scanner configuration
    marker: str = Field(
        default="#DCECOMP",
        description="Literal token that announces an embedded component definition",
    )

    script_extensions: List[str] = Field(
        default_factory=lambda: [".js", ".ts"],
        description="Extensions of script files; markup is only read from their comments",
    )

    markup_extensions: List[str] = Field(
        default_factory=lambda: [".dcecomp"],
        description="Extensions of markup-only files; scanned without comment filtering",
    )

    # Registry configuration
    registry_category: str = Field(
        default="Custom",
        description="Add-component menu category for compiled components",
    )

    # Compilation configuration
    workers: int = Field(
        default=1,
        ge=1,
        description="Number of threads used to process files (upserts stay in path order)",
    )

    def sourceKind_resolve(self, path: str) -> SourceKind:
        """
        Determine how a file has to be scanned from its extension.

        Args:
            path: Candidate file path

        Returns:
            SourceKind.SCRIPT for script extensions, else SourceKind.MARKUP_ONLY

        Example:
            >>> settings = AppSettings()
            >>> settings.sourceKind_resolve("src/door.ts")
            <SourceKind.SCRIPT: 'script'>
        """
        suffix = PurePath(path).suffix.lower()
        if suffix in (ext.lower() for ext in self.script_extensions):
            return SourceKind.SCRIPT
        return SourceKind.MARKUP_ONLY

    def candidateExtensions_list(self) -> List[str]:
        """All extensions file discovery should look for"""
        return [*self.script_extensions, *self.markup_extensions]


# Singleton instance - import this in your code
appsettings = AppSettings()
