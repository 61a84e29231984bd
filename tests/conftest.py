"""Pytest configuration and shared fixtures."""
import os
import sys
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from kd.inputs import DeploymentInput


@pytest.fixture
def full_input():
    """Input that triggers every resource kind."""
    return DeploymentInput.from_options(
        name="echo",
        image="gcr.io/x/echo:1",
        port=8080,
        domain="echo.example.com",
        want_certificate=True,
    )


@pytest.fixture
def env_file(tmp_path):
    """Write an env file and return its path."""
    path = tmp_path / "app.env"
    path.write_text("A=1\nB = two \n\nbad-line\nC=\n")
    return str(path)


@pytest.fixture(autouse=True)
def clean_kd_env(monkeypatch):
    """Keep KD_* variables from the caller's shell out of the tests."""
    for key in ("KD_CERT_ISSUER", "KD_CERT_ISSUER_KIND", "KD_INGRESS_CLASS", "KD_VERBOSE"):
        monkeypatch.delenv(key, raising=False)
