'''
DNS over HTTPS (DoH) provider client for the Cloudflare JSON API.
'''

__version__ = "0.1.0"
__author__ = "dohflare contributors"
__license__ = "Licensed under the Apache License 2.0"

from dohflare.core.errors import (  # noqa: E402
    DohDecodeError,
    DohError,
    DohStatusError,
    InvalidSubnetError,
)
from dohflare.modules import (  # noqa: E402
    CloudflareProvider,
    DohAnswer,
    DohProvider,
    DohQuestion,
    DohResponse,
    Provides,
)

__all__ = [
    "CloudflareProvider",
    "DohAnswer",
    "DohDecodeError",
    "DohError",
    "DohProvider",
    "DohQuestion",
    "DohResponse",
    "DohStatusError",
    "InvalidSubnetError",
    "Provides",
]
