#!/usr/bin/env python3
"""
Command-line interface for kd.

Turns deployment flags into a Kubernetes List manifest on stdout.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from kd import __version__
from kd.composer import compose
from kd.config import Config
from kd.env import EnvFileError, load_env
from kd.inputs import ConfigurationError, DeploymentInput
from kd.output import OutputManager, Verbosity, get_output, set_output, write_manifests
from kd.resources import manifest_list

EPILOG = """
Examples:
  kd --name app --image gcr.io/google-containers/echoserver:1.10 --port 8080 \\
     --domain echo.example.com --cert | kubectl replace --force -f -
  kd -name app -image nginx:1.25 -env app.env -port 80
"""


_TRUE_VALUES = ("1", "t", "true")
_FALSE_VALUES = ("0", "f", "false")


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value, e.g. the "true" in -cert=true."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kd",
        description="kd - Generate Kubernetes manifests for a single application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    # Single-dash spellings are kept for existing pipelines.
    parser.add_argument("--name", "-name", default="", help="app name")
    parser.add_argument("--image", "-image", default="", help="docker image")
    parser.add_argument("--env", "-env", default="", help="env file path")
    parser.add_argument("--port", "-port", type=int, default=0, help="port")
    parser.add_argument("--domain", "-domain", default="", help="domain mapping")
    parser.add_argument(
        "--cert",
        "-cert",
        nargs="?",
        type=parse_bool,
        const=True,
        default=False,
        help="request cert (also accepts --cert=true|false)",
    )
    parser.add_argument("--cert-name", "-cert-name", default="", help="cert secret name")
    parser.add_argument("--hsts", "-hsts", default="", help="default, preload")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only show errors",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show a summary of the generated resources on stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_input(args: argparse.Namespace) -> DeploymentInput:
    """
    Build the deployment input from parsed flags and the environment.

    Raises:
        ConfigurationError: If --name is missing
    """
    return DeploymentInput.from_options(
        name=args.name,
        image=args.image,
        env_file=args.env,
        port=args.port,
        domain=args.domain,
        want_certificate=args.cert,
        cert_secret_name=args.cert_name,
        hsts=args.hsts,
        cert_issuer=Config.cert_issuer(),
        cert_issuer_kind=Config.cert_issuer_kind(),
        ingress_class=Config.ingress_class(),
    )


def _resolve_verbosity(args: argparse.Namespace) -> Verbosity:
    if args.quiet:
        return Verbosity.QUIET
    if args.verbose or Config.verbose():
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


def _configure_logging(verbosity: Verbosity) -> None:
    if verbosity < Verbosity.VERBOSE:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for kd CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    verbosity = _resolve_verbosity(args)
    set_output(OutputManager(verbosity=verbosity))
    _configure_logging(verbosity)
    output = get_output()

    try:
        app = build_input(args)
    except ConfigurationError:
        # Missing name is a usage problem, not a failure.
        parser.print_help(sys.stderr)
        return

    try:
        env = load_env(app.env_file)
    except EnvFileError as e:
        output.error(f"Error: {e}", suggestion="Check the path passed to --env")
        sys.exit(1)

    resources = compose(app, env)
    if not resources:
        output.warning(f"No resources for {app.name}; pass --image, --port or --domain")

    for resource in resources:
        output.verbose(f"{resource.kind} {resource.name}")

    write_manifests(manifest_list(resources))


if __name__ == "__main__":
    main()
