"""
Target Value Object

Architectural Intent:
- Immutable address of the host being provisioned
- Parsed from 'user@host:port' strings, IPv6 literals in brackets
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Target:
    host: str
    user: str = "root"
    port: int = 22

    def __post_init__(self) -> None:
        if not self.host or any(c.isspace() for c in self.host):
            raise ValueError(f"Invalid target host: {self.host!r}")
        if not self.user:
            raise ValueError("Target user cannot be empty")
        if not (1 <= self.port <= 65535):
            raise ValueError(f"Port must be 1-65535, got {self.port}")

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.user}@{host}:{self.port}"

    @staticmethod
    def parse(address: str) -> "Target":
        user = "root"
        port = 22
        host = address.strip()

        if "@" in host:
            user, host = host.split("@", 1)

        if host.startswith("["):
            end = host.find("]")
            if end == -1:
                raise ValueError(f"Unterminated IPv6 bracket in: {address}")
            rest = host[end + 1:]
            host = host[1:end]
            if rest.startswith(":"):
                port = int(rest[1:])
        elif host.count(":") == 1:
            host, _, port_text = host.partition(":")
            port = int(port_text)

        return Target(host=host, user=user, port=port)
