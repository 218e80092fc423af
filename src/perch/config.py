"""Server configuration.

ServerConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Configuration for serving a composed dispatch table. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(port=8443, ssl_certfile="cert.pem", ssl_keyfile="key.pem")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1

    # Logging
    log_level: str = "info"

    # TLS (optional)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    @property
    def tls(self) -> bool:
        """True when both a certificate and a key are configured."""
        return bool(self.ssl_certfile and self.ssl_keyfile)
