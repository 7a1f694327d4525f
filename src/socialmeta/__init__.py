"""Facebook Page metadata rendering with a short-TTL Graph API cache."""

__version__ = "0.1.0"
