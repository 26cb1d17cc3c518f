"""
URL utilities shared by the analyzer and the API layer.

- Bare domains are upgraded to https before an origin is derived
- robots.txt paths resolve against a base URL, falling back to the raw pattern
"""

from __future__ import annotations

from urllib.parse import urljoin, urlparse


class URLNormalizer:
    """Normalizes site URLs and resolves robots.txt path patterns."""

    @classmethod
    def normalize(cls, url: str) -> str:
        """
        Ensure the URL carries a scheme and uses HTTPS.
        Raises ValueError for blank input, embedded whitespace or an unparseable host.
        """
        normalized = (url or "").strip()
        if not normalized:
            raise ValueError("URL is required")
        if any(ch.isspace() for ch in normalized):
            raise ValueError(f"Invalid URL: {normalized!r}")

        if normalized.startswith("http://"):
            normalized = "https://" + normalized[len("http://"):]
        elif not normalized.startswith("https://"):
            normalized = "https://" + normalized

        # urlparse raises ValueError for malformed hosts such as "[::1"
        if not urlparse(normalized).netloc:
            raise ValueError(f"Invalid URL: {normalized!r}")
        return normalized

    @classmethod
    def origin(cls, url: str) -> str:
        """scheme://host[:port] of an already-normalized URL."""
        parsed = urlparse(url)
        return f"{parsed.scheme}://{parsed.netloc.lower()}"

    @classmethod
    def robots_url(cls, url: str) -> str:
        return f"{cls.origin(cls.normalize(url))}/robots.txt"

    @classmethod
    def domain(cls, url: str) -> str:
        return urlparse(cls.normalize(url)).netloc.lower()

    @classmethod
    def resolve(cls, path: str, base_url: str | None) -> str:
        """
        Resolve a robots.txt path against base_url.
        Returns the raw path when there is no usable base or resolution fails.
        """
        if not base_url:
            return path
        try:
            base = urlparse(base_url)
            if not base.scheme or not base.netloc:
                return path
            return urljoin(base_url, path)
        except ValueError:
            return path
