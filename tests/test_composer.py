"""Tests for resource composition."""

import pytest

from kd.composer import compose
from kd.env import EnvVar
from kd.inputs import DeploymentInput
from kd.output import dump_manifests
from kd.resources import Certificate, Deployment, Ingress, Service, manifest_list


def _kinds(resources):
    return [r.kind for r in resources]


class TestConditionalResources:
    """Test which resources each input produces."""

    def test_name_only(self):
        """Test that a bare name produces nothing."""
        assert compose(DeploymentInput(name="echo")) == ()

    @pytest.mark.parametrize("image", [None, ""])
    def test_no_image_no_deployment(self, image):
        """Test that no Deployment is emitted without an image."""
        app = DeploymentInput.from_options(name="echo", image=image, port=8080)

        assert "Deployment" not in _kinds(compose(app))

    @pytest.mark.parametrize("port", [None, 0, -1])
    def test_no_port_no_service(self, port):
        """Test that no Service is emitted for a missing or non-positive port."""
        app = DeploymentInput(name="echo", image="nginx", port=port)

        assert "Service" not in _kinds(compose(app))

    def test_image_only(self):
        """Test that an image alone yields only a Deployment."""
        resources = compose(DeploymentInput(name="echo", image="nginx"))

        assert _kinds(resources) == ["Deployment"]

    def test_port_only(self):
        """Test that a port alone yields only a Service."""
        resources = compose(DeploymentInput(name="echo", port=8080))

        assert _kinds(resources) == ["Service"]
        assert resources[0].target_port == 8080

    def test_cert_without_domain(self):
        """Test that a certificate request without a domain is ignored."""
        resources = compose(DeploymentInput(name="echo", want_certificate=True))

        assert resources == ()

    def test_ingress_without_service(self):
        """Test that the Ingress is emitted even when no Service exists."""
        resources = compose(DeploymentInput(name="echo", domain="echo.example.com"))

        assert _kinds(resources) == ["Ingress"]
        manifest = resources[0].to_manifest()
        backend = manifest["spec"]["rules"][0]["http"]["paths"][0]["backend"]
        assert backend == {"serviceName": "echo", "servicePort": "http"}


class TestCertificateAndTls:
    """Test that the Certificate and Ingress agree on the TLS secret."""

    def test_derived_secret_shared(self):
        """Test that the derived secret name is shared by Certificate and Ingress."""
        app = DeploymentInput(
            name="echo", domain="api.echo.example.com", want_certificate=True
        )

        certificate, ingress = compose(app)
        assert isinstance(certificate, Certificate)
        assert isinstance(ingress, Ingress)
        assert certificate.secret_name == "api-echo-example-com"
        assert ingress.tls_secret_name == certificate.secret_name
        assert ingress.to_manifest()["spec"]["tls"] == [
            {"secretName": "api-echo-example-com"}
        ]

    def test_explicit_secret_shared(self):
        """Test that an explicit secret name is shared by Certificate and Ingress."""
        app = DeploymentInput(
            name="echo",
            domain="echo.example.com",
            want_certificate=True,
            cert_secret_name="echo-tls",
        )

        certificate, ingress = compose(app)
        assert certificate.secret_name == "echo-tls"
        assert ingress.tls_secret_name == "echo-tls"

    def test_no_certificate(self):
        """Test that without --cert there is no TLS and no HTTPS redirect."""
        app = DeploymentInput(
            name="echo",
            domain="echo.example.com",
            cert_secret_name="echo-tls",
        )

        resources = compose(app)
        assert _kinds(resources) == ["Ingress"]
        manifest = resources[0].to_manifest()
        assert manifest["spec"]["tls"] == []
        assert manifest["metadata"]["annotations"]["parapet.moonrhythm.io/redirect-https"] == "false"

    def test_hsts_passthrough(self):
        """Test that the HSTS value is copied verbatim."""
        app = DeploymentInput(name="echo", domain="echo.example.com", hsts="preload")

        (ingress,) = compose(app)
        assert ingress.to_manifest()["metadata"]["annotations"]["parapet.moonrhythm.io/hsts"] == "preload"

    def test_issuer_and_class_from_input(self):
        """Test that issuer and ingress class come from the input."""
        app = DeploymentInput(
            name="echo",
            domain="echo.example.com",
            want_certificate=True,
            cert_issuer="letsencrypt-staging",
            cert_issuer_kind="Issuer",
            ingress_class="nginx",
        )

        certificate, ingress = compose(app)
        acme = certificate.to_manifest()["spec"]["acme"]
        assert acme["issuerRef"] == {"kind": "Issuer", "name": "letsencrypt-staging"}
        assert acme["config"][0]["http01"] == {"ingressClass": "nginx"}
        annotations = ingress.to_manifest()["metadata"]["annotations"]
        assert annotations["kubernetes.io/ingress.class"] == "nginx"


class TestEndToEnd:
    """Test complete compositions."""

    def test_all_resources(self, full_input):
        """Test that a full input emits every kind in order."""
        resources = compose(full_input)

        assert _kinds(resources) == ["Deployment", "Service", "Certificate", "Ingress"]
        deployment, service, certificate, ingress = resources
        assert isinstance(deployment, Deployment)
        assert isinstance(service, Service)
        assert certificate.secret_name == "echo-example-com"

        ingress_manifest = ingress.to_manifest()
        assert ingress_manifest["spec"]["tls"] == [{"secretName": "echo-example-com"}]
        assert ingress_manifest["metadata"]["annotations"]["parapet.moonrhythm.io/redirect-https"] == "true"

    def test_every_resource_shares_name_and_label(self, full_input):
        """Test that every resource carries the app name and label."""
        for resource in compose(full_input):
            metadata = resource.to_manifest()["metadata"]
            assert metadata["name"] == "echo"
            assert metadata["labels"] == {"app": "echo"}

    def test_env_reaches_container(self):
        """Test that env vars, duplicates included, reach the container."""
        env = (EnvVar("A", "1"), EnvVar("A", "2"))
        (deployment,) = compose(DeploymentInput(name="echo", image="nginx"), env)

        container = deployment.to_manifest()["spec"]["template"]["spec"]["containers"][0]
        assert container["env"] == [{"name": "A", "value": "1"}, {"name": "A", "value": "2"}]

    def test_env_list_accepted(self):
        """Test that any sequence of env vars can be passed."""
        (deployment,) = compose(DeploymentInput(name="echo", image="nginx"), [EnvVar("A", "1")])

        assert deployment.env == (EnvVar("A", "1"),)

    def test_idempotent(self, full_input):
        """Test that composing twice gives identical output."""
        first = dump_manifests(manifest_list(compose(full_input)))
        second = dump_manifests(manifest_list(compose(full_input)))

        assert first == second
        assert compose(full_input) == compose(full_input)
