#!/usr/bin/env python3
"""
Example script demonstrating hostname verification against certificate names.
"""
import sys
import os

# Add the project root to the path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from peercert.models.config import Config
from peercert.security.certificate import StaticCertificate
from peercert.security.name_verifier import CertificateNameVerifier


def show(verifier, cert, hostnames):
    for hostname in hostnames:
        result = verifier.verify_detailed(cert, hostname)
        if result.is_authorized:
            print(f"  ✓ {hostname} (matched {result.source.upper()} {result.matched_name})")
        else:
            print(f"  ✗ {hostname} ({result.error_message})")


def main():
    """Demonstrate SAN matching, the legacy CN fallback and wildcard rules."""
    verifier = CertificateNameVerifier()

    print("=== Peer Certificate Hostname Verification Demo ===\n")

    print("1. Certificate with subjectAltName (CN is ignored)...")
    cert = StaticCertificate(
        dns_names=["foo.test", "*.bar.test", "test.webrtc.org"],
        common_name="*.webrtc.org"
    )
    show(verifier, cert, ["foo.test", "a.bar.test", "www.webrtc.org", "a.b.bar.test", "bar.test"])

    print("\n2. Legacy certificate with only a commonName...")
    legacy_cert = StaticCertificate(common_name="*.webrtc.org")
    show(verifier, legacy_cert, ["alice.webrtc.org", "a.b.webrtc.org", "webrtc.org"])

    print("\n3. Same legacy certificate with the commonName fallback disabled...")
    strict_verifier = CertificateNameVerifier(Config(legacy_common_name_fallback=False))
    show(strict_verifier, legacy_cert, ["alice.webrtc.org"])

    print("\n4. Partial-label wildcards are never expanded...")
    show(verifier, StaticCertificate(dns_names=["f*o.example.com"]), ["foo.example.com"])

    print("\n5. No peer certificate...")
    show(verifier, None, ["webrtc.org"])


if __name__ == "__main__":
    main()
