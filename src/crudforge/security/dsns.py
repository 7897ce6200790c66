"""DSN parsing for adapter connection configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit

from .redaction import REDACTED_VALUE, redact_query_params


@dataclass
class DSNConfig:
    driver: str
    username: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[int]
    database: Optional[str]
    path: str
    query: dict[str, str] = field(default_factory=dict)

    def redacted(self) -> str:
        """
        The DSN with its password and sensitive query values masked.
        """
        netloc = ""
        if self.username:
            netloc += self.username
            if self.password:
                netloc += f":{REDACTED_VALUE}"
            netloc += "@"
        if self.host:
            netloc += self.host
        if self.port:
            netloc += f":{self.port}"

        # Keep the double slash even when there is no netloc (sqlite:///file.db).
        result = f"{self.driver}://{netloc}{self.path}"
        if self.query:
            result += f"?{urlencode(redact_query_params(self.query))}"
        return result


def parse_dsn(dsn: str) -> DSNConfig:
    parsed = urlsplit(dsn)
    return DSNConfig(
        driver=parsed.scheme,
        username=parsed.username,
        password=parsed.password,
        host=parsed.hostname,
        port=parsed.port,
        database=parsed.path.lstrip("/") or None,
        path=parsed.path or "",
        query=dict(parse_qsl(parsed.query)),
    )
