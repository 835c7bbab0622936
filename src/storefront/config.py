"""Storefront configuration.

StorefrontConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from storefront.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class StorefrontConfig:
    """Renderer and runtime configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = StorefrontConfig(site_name="Shop", base_path="/shop/")
    """

    site_name: str = "Storefront"

    # Serving
    base_path: str = "/"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 5173

    # Catalog queries
    page_size: int = 20
    related_limit: int = 20

    # Templates
    template_dir: str | Path | None = None  # Searched before the packaged templates
    document_template: str | Path | None = None  # HTML shell with <!--app-head--> / <!--app-html-->
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.page_size < 1:
            msg = f"page_size must be at least 1, got {self.page_size}."
            raise ConfigurationError(msg)
        if self.related_limit < 0:
            msg = f"related_limit must not be negative, got {self.related_limit}."
            raise ConfigurationError(msg)
        if not (self.base_path.startswith("/") and self.base_path.endswith("/")):
            msg = f"base_path must start and end with '/', got {self.base_path!r}."
            raise ConfigurationError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StorefrontConfig":
        """Build a config from ``STOREFRONT_*`` environment variables.

        ``STOREFRONT_ENV=production`` turns debug off; any other value
        (or none) runs in development mode.
        """
        env = os.environ if environ is None else environ
        production = env.get("STOREFRONT_ENV", "development") == "production"
        port = env.get("PORT", "")
        return cls(
            base_path=env.get("STOREFRONT_BASE", "/"),
            debug=not production,
            port=int(port) if port.isdigit() else 5173,
            log_level=env.get("STOREFRONT_LOG_LEVEL", "info"),
        )
