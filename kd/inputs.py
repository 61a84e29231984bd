"""
Deployment input model for kd.

A DeploymentInput is built once at the command-line boundary and handed to the
composer. It is immutable, so every resource built from it sees the same values.
"""

from dataclasses import dataclass
from typing import Optional


DEFAULT_CERT_ISSUER = "letsencrypt"
DEFAULT_CERT_ISSUER_KIND = "ClusterIssuer"
DEFAULT_INGRESS_CLASS = "parapet"


class ConfigurationError(ValueError):
    """Raised when the deployment input is missing a required value."""


def domain_to_secret_name(domain: str) -> str:
    """
    Derive a TLS secret name from a domain.

    Args:
        domain: Hostname, e.g. "echo.example.com"

    Returns:
        The domain with every "." replaced by "-", e.g. "echo-example-com"
    """
    return domain.replace(".", "-")


@dataclass(frozen=True)
class DeploymentInput:
    """
    Normalized deployment intent.

    Optional string fields use None for "unset"; use from_options() to build
    one from raw flag values where empty strings mean unset.
    """

    name: str
    image: Optional[str] = None
    env_file: Optional[str] = None
    port: Optional[int] = None
    domain: Optional[str] = None
    want_certificate: bool = False
    cert_secret_name: Optional[str] = None
    hsts: str = ""
    cert_issuer: str = DEFAULT_CERT_ISSUER
    cert_issuer_kind: str = DEFAULT_CERT_ISSUER_KIND
    ingress_class: str = DEFAULT_INGRESS_CLASS

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ConfigurationError("name is required")

    @classmethod
    def from_options(
        cls,
        name: Optional[str],
        image: Optional[str] = None,
        env_file: Optional[str] = None,
        port: Optional[int] = None,
        domain: Optional[str] = None,
        want_certificate: bool = False,
        cert_secret_name: Optional[str] = None,
        hsts: Optional[str] = None,
        cert_issuer: Optional[str] = None,
        cert_issuer_kind: Optional[str] = None,
        ingress_class: Optional[str] = None,
    ) -> "DeploymentInput":
        """
        Build a DeploymentInput from raw option values.

        Empty strings are treated as unset and a port of zero means no port.

        Raises:
            ConfigurationError: If name is missing or blank
        """
        return cls(
            name=(name or "").strip(),
            image=image or None,
            env_file=env_file or None,
            port=port or None,
            domain=domain or None,
            want_certificate=bool(want_certificate),
            cert_secret_name=cert_secret_name or None,
            hsts=hsts or "",
            cert_issuer=cert_issuer or DEFAULT_CERT_ISSUER,
            cert_issuer_kind=cert_issuer_kind or DEFAULT_CERT_ISSUER_KIND,
            ingress_class=ingress_class or DEFAULT_INGRESS_CLASS,
        )

    @property
    def wants_workload(self) -> bool:
        return bool(self.image)

    @property
    def wants_exposure(self) -> bool:
        return self.port is not None and self.port > 0

    def tls_secret_name(self) -> Optional[str]:
        """
        Return the TLS secret name in effect, or None when no certificate is requested.

        The explicit cert_secret_name wins; otherwise the name is derived from
        the domain with domain_to_secret_name().
        """
        if not self.domain or not self.want_certificate:
            return None
        return self.cert_secret_name or domain_to_secret_name(self.domain)
