"""
BrooBot configuration handling.

Provides YAML configuration loading with environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

DEFAULT_LISTING_URL = "https://theresanaiforthat.com/s/free/"
DEFAULT_READER_URL = "https://r.jina.ai/"
DEFAULT_SEARCH_URL = "https://google.serper.dev/search"
DEFAULT_ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class BrooBotConfig:
    """
    BrooBot configuration.

    Can be loaded from a YAML file or created programmatically. Secrets and
    deployment settings are usually supplied through the environment, see
    apply_env().
    """
    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    frontend_url: str = "http://localhost:5173"
    mock_mode: bool = False

    # Tool search
    listing_url: str = DEFAULT_LISTING_URL
    reader_url: str = DEFAULT_READER_URL
    scrape_timeout: float = 15.0
    cache_ttl: int = 86400  # seconds
    default_limit: int = 5

    # Deep research
    search_url: str = DEFAULT_SEARCH_URL
    search_timeout: float = 10.0
    serper_api_key: str = ""
    max_sources: int = 5

    # Completion provider
    anthropic_api_key: str = ""
    anthropic_url: str = DEFAULT_ANTHROPIC_URL
    llm_timeout: float = 60.0
    models: Dict[str, str] = field(default_factory=lambda: {
        "fast": "claude-3-haiku-20240307",
        "quality": "claude-3-sonnet-20240229",
    })

    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    log_format: str = "%(asctime)s %(name)s %(levelname)s %(message)s"
    log_max_bytes: int = 10485760  # 10MB
    log_backup_count: int = 3

    @classmethod
    def load(cls, path: str) -> "BrooBotConfig":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            BrooBotConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config file is invalid YAML
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrooBotConfig":
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary with optional sections
                server, tools, research, llm and logging

        Returns:
            BrooBotConfig instance
        """
        server_cfg = data.get("server", {})
        tools_cfg = data.get("tools", {})
        research_cfg = data.get("research", {})
        llm_cfg = data.get("llm", {})
        logging_cfg = data.get("logging", {})

        defaults = cls()
        models = dict(defaults.models)
        models.update(llm_cfg.get("models", {}))

        return cls(
            host=server_cfg.get("host", defaults.host),
            port=server_cfg.get("port", defaults.port),
            frontend_url=server_cfg.get("frontend_url", defaults.frontend_url),
            mock_mode=server_cfg.get("mock_mode", False),
            listing_url=tools_cfg.get("listing_url", DEFAULT_LISTING_URL),
            reader_url=tools_cfg.get("reader_url", DEFAULT_READER_URL),
            scrape_timeout=tools_cfg.get("scrape_timeout", 15.0),
            cache_ttl=tools_cfg.get("cache_ttl", 86400),
            default_limit=tools_cfg.get("default_limit", 5),
            search_url=research_cfg.get("search_url", DEFAULT_SEARCH_URL),
            search_timeout=research_cfg.get("search_timeout", 10.0),
            serper_api_key=research_cfg.get("serper_api_key", ""),
            max_sources=research_cfg.get("max_sources", 5),
            anthropic_api_key=llm_cfg.get("api_key", ""),
            anthropic_url=llm_cfg.get("url", DEFAULT_ANTHROPIC_URL),
            llm_timeout=llm_cfg.get("timeout", 60.0),
            models=models,
            log_level=logging_cfg.get("level", "INFO"),
            log_file=logging_cfg.get("file", ""),
            log_format=logging_cfg.get("format", defaults.log_format),
            log_max_bytes=logging_cfg.get("max_bytes", 10485760),
            log_backup_count=logging_cfg.get("backup_count", 3),
        )

    @classmethod
    def from_env(
        cls,
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "BrooBotConfig":
        """Load YAML (if given) and overlay environment variables."""
        config = cls.load(path) if path else cls()
        config.apply_env(os.environ if environ is None else environ)
        return config

    def apply_env(self, environ: Mapping[str, str]) -> None:
        """
        Override settings from environment variables.

        Recognized: ANTHROPIC_API_KEY, SERPER_API_KEY, USE_MOCK_MODE, PORT,
        FRONTEND_URL, LOG_LEVEL.
        """
        if environ.get("ANTHROPIC_API_KEY"):
            self.anthropic_api_key = environ["ANTHROPIC_API_KEY"]
        if environ.get("SERPER_API_KEY"):
            self.serper_api_key = environ["SERPER_API_KEY"]
        if "USE_MOCK_MODE" in environ:
            self.mock_mode = environ["USE_MOCK_MODE"].strip().lower() in _TRUE_VALUES
        if environ.get("PORT"):
            self.port = int(environ["PORT"])
        if environ.get("FRONTEND_URL"):
            self.frontend_url = environ["FRONTEND_URL"]
        if environ.get("LOG_LEVEL"):
            self.log_level = environ["LOG_LEVEL"]

    @property
    def llm_enabled(self) -> bool:
        """True when real completions can be requested."""
        return bool(self.anthropic_api_key) and not self.mock_mode

    @property
    def cors_origins(self) -> List[str]:
        return [self.frontend_url]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary (secrets excluded).

        Returns:
            Configuration as dictionary
        """
        return {
            "server": {
                "host": self.host,
                "port": self.port,
                "frontend_url": self.frontend_url,
                "mock_mode": self.mock_mode,
            },
            "tools": {
                "listing_url": self.listing_url,
                "reader_url": self.reader_url,
                "scrape_timeout": self.scrape_timeout,
                "cache_ttl": self.cache_ttl,
                "default_limit": self.default_limit,
            },
            "research": {
                "search_url": self.search_url,
                "search_timeout": self.search_timeout,
                "max_sources": self.max_sources,
            },
            "llm": {
                "url": self.anthropic_url,
                "timeout": self.llm_timeout,
                "models": dict(self.models),
            },
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
                "format": self.log_format,
                "max_bytes": self.log_max_bytes,
                "backup_count": self.log_backup_count,
            },
        }
