"""Configuration management for mdview.

Supports an optional TOML configuration file with auto-discovery. Command
line values are applied on top with with_overrides().
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from mdview.core.scanner import ScanOrder

CONFIG_FILENAME = "mdview.toml"


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    shutdown_timeout: float = 10.0


@dataclass(frozen=True)
class DocsConfig:
    """Served directory configuration."""

    source_dir: Path = field(default_factory=lambda: Path("."))
    order: ScanOrder = ScanOrder.DEPTH


@dataclass(frozen=True)
class ThemeConfig:
    """Page theme configuration."""

    dark: bool = False


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    server: ServerConfig
    docs: DocsConfig
    theme: ThemeConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for mdview.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls.default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(server=ServerConfig(), docs=DocsConfig(), theme=ThemeConfig())

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        return cls(
            server=cls._parse_server(data.get("server")),
            docs=cls._parse_navigation(data.get("navigation")),
            theme=cls._parse_theme(data.get("theme")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        shutdown_timeout = data.get("shutdown_timeout", 10.0)
        if not isinstance(shutdown_timeout, int | float) or isinstance(shutdown_timeout, bool):
            raise ValueError("server.shutdown_timeout must be a number")
        if shutdown_timeout < 0:
            raise ValueError("server.shutdown_timeout must not be negative")

        return ServerConfig(host=host, port=port, shutdown_timeout=float(shutdown_timeout))

    @classmethod
    def _parse_navigation(cls, data: object) -> DocsConfig:
        """Parse navigation configuration section.

        Args:
            data: Raw navigation section data

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig()

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        order = data.get("order", ScanOrder.DEPTH.value)
        if not isinstance(order, str):
            raise ValueError("navigation.order must be a string")
        try:
            scan_order = ScanOrder(order)
        except ValueError as e:
            choices = ", ".join(o.value for o in ScanOrder)
            raise ValueError(f"navigation.order must be one of: {choices}") from e

        return DocsConfig(order=scan_order)

    @classmethod
    def _parse_theme(cls, data: object) -> ThemeConfig:
        """Parse theme configuration section."""
        if data is None:
            return ThemeConfig()

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        dark = data.get("dark", False)
        if not isinstance(dark, bool):
            raise ValueError("theme.dark must be a boolean")

        return ThemeConfig(dark=dark)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        order: ScanOrder | None = None,
        dark: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override docs.source_dir
            order: Override docs.order
            dark: Override theme.dark

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        docs = self.docs
        if source_dir is not None or order is not None:
            docs = replace(
                self.docs,
                source_dir=source_dir if source_dir is not None else self.docs.source_dir,
                order=order if order is not None else self.docs.order,
            )

        theme = self.theme
        if dark is not None:
            theme = replace(self.theme, dark=dark)

        return replace(self, server=server, docs=docs, theme=theme)
