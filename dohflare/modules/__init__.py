from .cloudflare import CloudflareProvider, Provides
from .models import DohAnswer, DohQuestion, DohResponse
from .provider import DohProvider

__all__ = [
    "CloudflareProvider",
    "Provides",
    "DohAnswer",
    "DohQuestion",
    "DohResponse",
    "DohProvider",
]
