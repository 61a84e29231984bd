"""
Resource composition for kd.

compose() decides which resources a DeploymentInput produces and wires their
shared names, labels, port name and TLS secret together.
"""

import logging
from typing import List, Sequence, Tuple

from kd.env import EnvVar
from kd.inputs import DeploymentInput
from kd.resources import Certificate, Deployment, Ingress, Resource, Service

logger = logging.getLogger(__name__)


def compose(app: DeploymentInput, env: Sequence[EnvVar] = ()) -> Tuple[Resource, ...]:
    """
    Build the resources for a deployment.

    Resources come out in a fixed order: Deployment, Service, Certificate,
    Ingress. Each is included only when its inputs are present:

    - Deployment when an image is set
    - Service when the port is positive
    - Certificate when a domain is set and a certificate is requested
    - Ingress when a domain is set

    The Ingress does not require the Service; its backend refers to the
    service by name and the "http" port name either way.

    Args:
        app: Deployment input
        env: Environment variables for the workload container

    Returns:
        Resources in emission order
    """
    resources: List[Resource] = []

    if app.wants_workload:
        resources.append(Deployment(name=app.name, image=app.image, env=tuple(env)))

    if app.wants_exposure:
        resources.append(Service(name=app.name, target_port=app.port))

    if app.domain:
        secret_name = app.tls_secret_name()

        if secret_name:
            resources.append(
                Certificate(
                    name=app.name,
                    domain=app.domain,
                    secret_name=secret_name,
                    issuer_name=app.cert_issuer,
                    issuer_kind=app.cert_issuer_kind,
                    ingress_class=app.ingress_class,
                )
            )

        resources.append(
            Ingress(
                name=app.name,
                domain=app.domain,
                ingress_class=app.ingress_class,
                tls_secret_name=secret_name,
                hsts=app.hsts,
            )
        )

    for resource in resources:
        logger.debug("Composed %s %s", resource.kind, resource.name)
    return tuple(resources)
