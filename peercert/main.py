"""
Command line entry point: check a certificate file against one or more hostnames.
"""

import sys
import logging
from dataclasses import replace
from typing import List, Optional

from .models.config import Config
from .services.config_service import ConfigService
from .services.logging_service import LoggingService
from .security.certificate import X509Certificate, load_certificate_file
from .security.models import VerificationResult
from .security.name_verifier import CertificateNameVerifier


EXIT_AUTHORIZED = 0
EXIT_NOT_AUTHORIZED = 1
EXIT_USAGE_ERROR = 2


class HostCheckApplication:
    """Wires configuration, logging and the name verifier together."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config: Optional[Config] = None
        self.logging_service = None
        self.verifier = None
        self.logger = logging.getLogger(__name__)

    def initialize(self, **overrides) -> None:
        """
        Load configuration, apply command line overrides and set up logging.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            ValueError: If the configuration is invalid
        """
        if self.config_path:
            config = ConfigService(self.config_path).get_config()
        else:
            config = Config()

        overrides = {key: value for key, value in overrides.items() if value is not None}
        self.config = replace(config, **overrides) if overrides else config

        self.logging_service = LoggingService(self.config)
        self.verifier = CertificateNameVerifier(self.config)

    def check(self, cert: X509Certificate, hostnames: List[str]) -> List[VerificationResult]:
        results = []
        for hostname in hostnames:
            result = self.verifier.verify_detailed(cert, hostname)
            self.logging_service.log_with_context(
                'info' if result.is_authorized else 'warning',
                f"Host {hostname} {'authorized' if result.is_authorized else 'rejected'}",
                hostname=hostname,
                matched_name=result.matched_name,
                source=result.source,
                error_message=result.error_message
            )
            results.append(result)
        return results


def format_result(result: VerificationResult) -> str:
    if result.is_authorized:
        return f"OK      {result.hostname} (matched {result.source.upper()} {result.matched_name})"
    return f"REJECT  {result.hostname} ({result.error_message})"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Check whether an X.509 certificate authorizes a peer to act as a hostname'
    )
    parser.add_argument('--cert', help='PEM or DER certificate file')
    parser.add_argument('--host', action='append', default=[], dest='hosts',
                        help='Hostname to check (may be repeated)')
    parser.add_argument('--config', '-c', help='Configuration file path')
    parser.add_argument('--show-names', action='store_true', help='Print the names the certificate claims')
    parser.add_argument('--no-cn-fallback', action='store_true',
                        help='Never match the commonName, even without subjectAltName')
    parser.add_argument('--no-wildcards', action='store_true', help='Compare wildcard names literally')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Override the configured log level')
    parser.add_argument('--write-default-config', metavar='PATH',
                        help='Write an example configuration file and exit')

    args = parser.parse_args(argv)

    if args.write_default_config:
        try:
            ConfigService().create_default_config_file(args.write_default_config)
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_USAGE_ERROR
        print(f"Created default configuration at: {args.write_default_config}")
        return EXIT_AUTHORIZED

    if not args.cert:
        parser.print_usage(sys.stderr)
        print("error: --cert is required", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if not args.hosts and not args.show_names:
        parser.print_usage(sys.stderr)
        print("error: at least one --host or --show-names is required", file=sys.stderr)
        return EXIT_USAGE_ERROR

    app = HostCheckApplication(config_path=args.config)
    try:
        app.initialize(
            legacy_common_name_fallback=False if args.no_cn_fallback else None,
            allow_wildcards=False if args.no_wildcards else None,
            log_level=args.log_level
        )
        cert = load_certificate_file(args.cert)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if args.show_names:
        try:
            names = cert.names()
        except ValueError as e:
            print(f"error: cannot read certificate names: {e}", file=sys.stderr)
            return EXIT_USAGE_ERROR
        print(f"Subject alternative DNS names: {', '.join(names.dns_names) or '(none)'}")
        print(f"Common name: {names.common_name or '(none)'}")

    results = app.check(cert, args.hosts)
    for result in results:
        print(format_result(result))

    if all(result.is_authorized for result in results):
        return EXIT_AUTHORIZED
    return EXIT_NOT_AUTHORIZED


if __name__ == '__main__':
    sys.exit(main())
