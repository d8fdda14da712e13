"""In-memory URL shortener with per-link TTL, click quotas and ownership."""

__version__ = '1.0.0'
