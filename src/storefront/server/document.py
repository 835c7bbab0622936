"""Document assembly — splice a render into the HTML shell.

The shell carries two placeholders, ``<!--app-head-->`` and
``<!--app-html-->``. The hydration script goes right before ``</head>``.
"""

from importlib.resources import files
from pathlib import Path

from storefront.config import StorefrontConfig
from storefront.hydration import initial_data_script
from storefront.server.renderer import RenderResult

HEAD_PLACEHOLDER = "<!--app-head-->"
HTML_PLACEHOLDER = "<!--app-html-->"


def load_shell(config: StorefrontConfig | None = None) -> str:
    """Return the HTML shell: ``config.document_template`` or the packaged one."""
    if config is not None and config.document_template is not None:
        return Path(config.document_template).read_text(encoding="utf-8")
    return files("storefront.templating").joinpath("templates/index.html").read_text(encoding="utf-8")


def compose_document(shell: str, result: RenderResult) -> str:
    """Fill *shell* with the head, markup and handoff script of *result*."""
    return (
        shell.replace(HEAD_PLACEHOLDER, result.head, 1)
        .replace(HTML_PLACEHOLDER, result.markup, 1)
        .replace("</head>", f"{initial_data_script(result.initial_data)}</head>", 1)
    )
