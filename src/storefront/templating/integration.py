"""Kida environment setup.

Creates a kida Environment from StorefrontConfig. The environment is
created once at startup and shared read-only by every render, on the
server and in the client runtime alike.
"""

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from storefront.config import StorefrontConfig


def format_price(value: int) -> str:
    """``12900`` -> ``"12,900"``."""
    return f"{int(value):,}"


BUILTIN_GLOBALS = {
    "price": format_price,
}


def create_environment(config: StorefrontConfig | None = None) -> Environment:
    """Create a kida Environment for the storefront pages.

    ``config.template_dir``, when set, is searched before the packaged
    templates so individual pages can be overridden.
    """
    config = config or StorefrontConfig()

    loaders = []
    if config.template_dir is not None:
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("storefront.templating", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    for name, value in BUILTIN_GLOBALS.items():
        env.add_global(name, value)

    return env
