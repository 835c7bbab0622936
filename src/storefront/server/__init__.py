"""Server side: per-request renderer, document assembly, ASGI app."""
