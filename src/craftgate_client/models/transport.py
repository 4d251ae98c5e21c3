"""
Request and response structures passed through the HTTP pipeline.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PreparedRequest:
    """Outbound request with its final URL and body bytes.

    `url` is the exact string sent on the wire; the signature covers it.
    """
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    def with_headers(self, headers: Dict[str, str]) -> "PreparedRequest":
        """Return a copy with extra headers merged over the existing ones."""
        merged = dict(self.headers)
        merged.update(headers)
        return PreparedRequest(self.method, self.url, merged, self.body)


@dataclass(frozen=True)
class RawResponse:
    """Fully read HTTP response."""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
