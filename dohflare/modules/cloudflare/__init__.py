from .core import (
    UPSTREAM,
    CloudflareProvider,
    Provides,
    auto_run,
    render_response,
)

__all__ = [
    "UPSTREAM",
    "CloudflareProvider",
    "Provides",
    "auto_run",
    "render_response",
]
