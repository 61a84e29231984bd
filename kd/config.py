"""
Centralized configuration management for kd.

Provides access to the environment variables that override kd's fixed
cluster-side identities. Only the CLI reads these; the composer receives the
values through DeploymentInput.
"""

import os

from kd.inputs import DEFAULT_CERT_ISSUER, DEFAULT_CERT_ISSUER_KIND, DEFAULT_INGRESS_CLASS


class Config:
    """
    Centralized configuration management.

    Provides access to environment variables with defaults.
    """

    @staticmethod
    def get(key: str, default: str = "") -> str:
        """
        Get an environment variable, falling back to default when unset or empty.

        Args:
            key: Environment variable name
            default: Value used when the variable is unset or empty

        Returns:
            Environment variable value or default
        """
        return os.getenv(key) or default

    @staticmethod
    def get_bool(key: str) -> bool:
        """
        Get a boolean environment variable.

        Args:
            key: Environment variable name

        Returns:
            True for "true", "1", "yes" or "on"; False otherwise
        """
        value = os.getenv(key, "").lower()
        return value in ("true", "1", "yes", "on")

    @staticmethod
    def cert_issuer() -> str:
        """Name of the issuer referenced by Certificate resources."""
        return Config.get("KD_CERT_ISSUER", DEFAULT_CERT_ISSUER)

    @staticmethod
    def cert_issuer_kind() -> str:
        """Kind of the issuer referenced by Certificate resources."""
        return Config.get("KD_CERT_ISSUER_KIND", DEFAULT_CERT_ISSUER_KIND)

    @staticmethod
    def ingress_class() -> str:
        """Ingress class used for routing and HTTP-01 challenges."""
        return Config.get("KD_INGRESS_CLASS", DEFAULT_INGRESS_CLASS)

    @staticmethod
    def verbose() -> bool:
        """Whether verbose diagnostics are on when no flag says otherwise."""
        return Config.get_bool("KD_VERBOSE")
