"""
kd - Generate Kubernetes manifests for a single application from a handful of flags.
"""

__version__ = "0.1.0"

from kd.inputs import ConfigurationError, DeploymentInput, domain_to_secret_name
from kd.env import EnvFileError, EnvVar, load_env, parse_env
from kd.resources import Certificate, Deployment, Ingress, Service, manifest_list
from kd.composer import compose
from kd.config import Config

__all__ = [
    "ConfigurationError",
    "DeploymentInput",
    "domain_to_secret_name",
    "EnvFileError",
    "EnvVar",
    "load_env",
    "parse_env",
    "Certificate",
    "Deployment",
    "Ingress",
    "Service",
    "manifest_list",
    "compose",
    "Config",
]
