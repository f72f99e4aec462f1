"""
Hostname authorization for peer certificates.

SAN dNSName entries are authoritative. The subject commonName is only
consulted, as a legacy fallback, when the certificate carries no SAN dNSName
at all; a present but non-matching SAN list is never rescued by the CN.
"""
import logging
from typing import Any, Optional

from .certificate import Certificate, X509Certificate
from .hostname_matcher import HostnameMatcher
from .models import NAME_SOURCE_CN, NAME_SOURCE_SAN, VerificationResult


class CertificateNameVerifier:
    """Decide whether a certificate authorizes a peer to act as a hostname."""

    def __init__(self, config=None):
        """
        Initialize the verifier.

        Args:
            config: Optional Config; ``legacy_common_name_fallback`` and
                ``allow_wildcards`` are read from it when present
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.legacy_common_name_fallback = getattr(config, 'legacy_common_name_fallback', True)
        self.matcher = HostnameMatcher(allow_wildcards=getattr(config, 'allow_wildcards', True))

    def verify(self, cert: Optional[Certificate], hostname: str) -> bool:
        """Return True if the certificate names the requested host."""
        return self.verify_detailed(cert, hostname).is_authorized

    def verify_detailed(self, cert: Optional[Certificate], hostname: str) -> VerificationResult:
        """Same decision as verify(), with the matched name and its source."""
        if cert is None:
            self.logger.debug(f"No peer certificate to verify against {hostname!r}")
            return VerificationResult(
                is_authorized=False,
                hostname=hostname,
                error_message="No peer certificate"
            )

        try:
            return self._check_names(cert, hostname)
        except Exception as e:
            self.logger.error(f"Hostname verification failed for {hostname!r}: {e}")
            return VerificationResult(
                is_authorized=False,
                hostname=hostname,
                error_message=f"Certificate name error: {str(e)}"
            )

    def _check_names(self, cert: Certificate, hostname: str) -> VerificationResult:
        if cert.has_subject_alt_names():
            dns_names = cert.subject_alt_dns_names()
            matched = self.matcher.first_match(dns_names, hostname)
            if matched is not None:
                self.logger.debug(f"Host {hostname!r} matched SAN entry {matched!r}")
                return VerificationResult(
                    is_authorized=True,
                    hostname=hostname,
                    matched_name=matched,
                    source=NAME_SOURCE_SAN
                )
            self.logger.debug(f"Host {hostname!r} matched none of {len(dns_names)} SAN entries")
            return VerificationResult(
                is_authorized=False,
                hostname=hostname,
                error_message=f"Host {hostname!r} is not listed in subjectAltName"
            )

        if not self.legacy_common_name_fallback:
            return VerificationResult(
                is_authorized=False,
                hostname=hostname,
                error_message="Certificate has no subjectAltName DNS entries"
            )

        common_name = cert.common_name()
        if common_name is None:
            return VerificationResult(
                is_authorized=False,
                hostname=hostname,
                error_message="Certificate has neither subjectAltName DNS entries nor a commonName"
            )

        if self.matcher.matches(common_name, hostname):
            self.logger.debug(f"Host {hostname!r} matched legacy commonName {common_name!r}")
            return VerificationResult(
                is_authorized=True,
                hostname=hostname,
                matched_name=common_name,
                source=NAME_SOURCE_CN
            )

        return VerificationResult(
            is_authorized=False,
            hostname=hostname,
            error_message=f"Host {hostname!r} does not match commonName {common_name!r}"
        )


def peer_certificate(session: Any) -> Optional[X509Certificate]:
    """
    Extract the peer certificate of an established TLS session.

    Args:
        session: ssl.SSLSocket or ssl.SSLObject, or None

    Returns:
        The decoded peer certificate, or None when there is none
    """
    if session is None:
        return None
    der = session.getpeercert(binary_form=True)
    if not der:
        return None
    return X509Certificate.from_der(der)


def verify_peer_cert_matches_host(session: Any, hostname: str,
                                  verifier: Optional[CertificateNameVerifier] = None) -> bool:
    """Check that the peer of a completed handshake is authorized as hostname."""
    verifier = verifier or CertificateNameVerifier()
    try:
        cert = peer_certificate(session)
    except Exception as e:
        verifier.logger.error(f"Could not read peer certificate: {e}")
        return False
    return verifier.verify(cert, hostname)
