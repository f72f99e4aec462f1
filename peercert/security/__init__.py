"""
Security package for peer certificate hostname verification.
"""
from .models import CertificateNames, VerificationResult
from .hostname_matcher import HostnameMatcher, matches, is_wildcard_pattern
from .certificate import Certificate, StaticCertificate, X509Certificate, load_certificate, load_certificate_file
from .name_verifier import CertificateNameVerifier, peer_certificate, verify_peer_cert_matches_host

__all__ = [
    'CertificateNames',
    'VerificationResult',
    'HostnameMatcher',
    'matches',
    'is_wildcard_pattern',
    'Certificate',
    'StaticCertificate',
    'X509Certificate',
    'load_certificate',
    'load_certificate_file',
    'CertificateNameVerifier',
    'peer_certificate',
    'verify_peer_cert_matches_host'
]
