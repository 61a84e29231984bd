"""
Typed Kubernetes resources emitted by kd.

Each resource is a frozen dataclass holding only the values that vary between
deployments. to_manifest() turns it into the plain dict that gets serialized.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence, Tuple, Union

from kd.env import EnvVar

HTTP_PORT_NAME = "http"
SERVICE_PORT = 80
CONTAINER_NAME = "app"

INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"
REDIRECT_HTTPS_ANNOTATION = "parapet.moonrhythm.io/redirect-https"
HSTS_ANNOTATION = "parapet.moonrhythm.io/hsts"


def app_labels(name: str) -> dict[str, str]:
    """Return the app label set shared by every resource and selector."""
    return {"app": name}


def _metadata(
    name: str,
    annotations: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "labels": app_labels(name)}
    if annotations is not None:
        metadata["annotations"] = annotations
    return metadata


@dataclass(frozen=True)
class Deployment:
    """Workload running the application image."""

    api_version: ClassVar[str] = "apps/v1"
    kind: ClassVar[str] = "Deployment"

    name: str
    image: str
    env: Tuple[EnvVar, ...] = ()
    replicas: int = 1
    max_surge: int = 1
    max_unavailable: int = 0

    def to_manifest(self) -> dict[str, Any]:
        container = {
            "name": CONTAINER_NAME,
            "image": self.image,
            "env": [e.to_dict() for e in self.env],
        }
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": _metadata(self.name),
            "spec": {
                "replicas": self.replicas,
                # Selector and template labels must match or the controller
                # never adopts its pods.
                "selector": {"matchLabels": app_labels(self.name)},
                "strategy": {
                    "type": "RollingUpdate",
                    "rollingUpdate": {
                        "maxSurge": self.max_surge,
                        "maxUnavailable": self.max_unavailable,
                    },
                },
                "template": {
                    "metadata": _metadata(self.name),
                    "spec": {"containers": [container]},
                },
            },
        }


@dataclass(frozen=True)
class Service:
    """Exposes the workload pods on a named http port."""

    api_version: ClassVar[str] = "v1"
    kind: ClassVar[str] = "Service"

    name: str
    target_port: int
    port: int = SERVICE_PORT

    def to_manifest(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": _metadata(self.name),
            "spec": {
                "selector": app_labels(self.name),
                "ports": [
                    {
                        "name": HTTP_PORT_NAME,
                        "port": self.port,
                        "targetPort": self.target_port,
                    }
                ],
            },
        }


@dataclass(frozen=True)
class Certificate:
    """cert-manager certificate request for a single domain."""

    api_version: ClassVar[str] = "certmanager.k8s.io/v1alpha1"
    kind: ClassVar[str] = "Certificate"

    name: str
    domain: str
    secret_name: str
    issuer_name: str
    issuer_kind: str
    ingress_class: str

    def to_manifest(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": _metadata(self.name),
            "spec": {
                "acme": {
                    "commonName": self.domain,
                    "dnsNames": [self.domain],
                    "issuerRef": {
                        "kind": self.issuer_kind,
                        "name": self.issuer_name,
                    },
                    "keyAlgorithm": "ecdsa",
                    "keySize": 256,
                    "secretName": self.secret_name,
                    "config": [
                        {
                            "domains": [self.domain],
                            "http01": {"ingressClass": self.ingress_class},
                        }
                    ],
                },
            },
        }


@dataclass(frozen=True)
class Ingress:
    """Routes a hostname to the service's http port, optionally over TLS."""

    api_version: ClassVar[str] = "extensions/v1beta1"
    kind: ClassVar[str] = "Ingress"

    name: str
    domain: str
    ingress_class: str
    tls_secret_name: Optional[str] = None
    hsts: str = ""

    @property
    def redirect_https(self) -> bool:
        return bool(self.tls_secret_name)

    def to_manifest(self) -> dict[str, Any]:
        annotations = {
            INGRESS_CLASS_ANNOTATION: self.ingress_class,
            REDIRECT_HTTPS_ANNOTATION: "true" if self.redirect_https else "false",
            HSTS_ANNOTATION: self.hsts,
        }
        tls = [{"secretName": self.tls_secret_name}] if self.tls_secret_name else []
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": _metadata(self.name, annotations=annotations),
            "spec": {
                "rules": [
                    {
                        "host": self.domain,
                        "http": {
                            "paths": [
                                {
                                    "path": "/",
                                    "backend": {
                                        "serviceName": self.name,
                                        "servicePort": HTTP_PORT_NAME,
                                    },
                                }
                            ],
                        },
                    }
                ],
                "tls": tls,
            },
        }


Resource = Union[Deployment, Service, Certificate, Ingress]


def manifest_list(resources: Sequence[Resource]) -> dict[str, Any]:
    """
    Wrap resources in a v1 List envelope.

    Args:
        resources: Resources in emission order

    Returns:
        List manifest dict with one item per resource
    """
    return {
        "apiVersion": "v1",
        "kind": "List",
        "items": [r.to_manifest() for r in resources],
    }
