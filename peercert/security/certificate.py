"""
Certificate accessors used by the name verifier.

The verifier only needs the decoded DNS names a certificate claims, so it
talks to the small ``Certificate`` interface below instead of a concrete
X.509 library. ``X509Certificate`` adapts a ``cryptography`` certificate,
``StaticCertificate`` holds names in memory.
"""
import os
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Union

from cryptography import x509
from cryptography.hazmat.backends import default_backend
from cryptography.x509.oid import NameOID

from .models import CertificateNames


PEM_CERTIFICATE_MARKER = b"-----BEGIN CERTIFICATE-----"


class Certificate(ABC):
    """Read-only view of the identities carried by a peer certificate."""

    @abstractmethod
    def has_subject_alt_names(self) -> bool:
        """True if the certificate carries at least one SAN dNSName."""

    @abstractmethod
    def subject_alt_dns_names(self) -> List[str]:
        """SAN dNSName entries in certificate order."""

    @abstractmethod
    def common_name(self) -> Optional[str]:
        """Subject commonName, or None."""

    def names(self) -> CertificateNames:
        return CertificateNames(
            dns_names=self.subject_alt_dns_names(),
            common_name=self.common_name(),
            has_subject_alt_names=self.has_subject_alt_names(),
        )


class StaticCertificate(Certificate):
    """Certificate whose names are supplied directly."""

    def __init__(self, dns_names: Iterable[str] = (), common_name: Optional[str] = None):
        self._dns_names = list(dns_names)
        self._common_name = common_name

    def has_subject_alt_names(self) -> bool:
        return len(self._dns_names) > 0

    def subject_alt_dns_names(self) -> List[str]:
        return list(self._dns_names)

    def common_name(self) -> Optional[str]:
        return self._common_name

    def __repr__(self):
        return f"StaticCertificate(dns_names={self._dns_names!r}, common_name={self._common_name!r})"


class X509Certificate(Certificate):
    """Adapter over a ``cryptography.x509.Certificate``."""

    def __init__(self, cert: x509.Certificate):
        self.cert = cert
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_pem(cls, data: Union[str, bytes]) -> "X509Certificate":
        if isinstance(data, str):
            data = data.encode()
        return cls(x509.load_pem_x509_certificate(data, default_backend()))

    @classmethod
    def from_der(cls, data: bytes) -> "X509Certificate":
        return cls(x509.load_der_x509_certificate(data, default_backend()))

    def _subject_alt_name(self) -> Optional[x509.SubjectAlternativeName]:
        # A malformed extension surfaces as ValueError from cryptography and is
        # left to propagate; falling back to the CN here would fail open.
        try:
            extension = self.cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
        except x509.ExtensionNotFound:
            return None
        return extension.value

    def subject_alt_dns_names(self) -> List[str]:
        san = self._subject_alt_name()
        if san is None:
            return []
        return list(san.get_values_for_type(x509.DNSName))

    def has_subject_alt_names(self) -> bool:
        return len(self.subject_alt_dns_names()) > 0

    def common_name(self) -> Optional[str]:
        """Return the most specific (last) commonName of the subject."""
        attributes = self.cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        if not attributes:
            return None
        value = attributes[-1].value
        if not isinstance(value, str):
            self.logger.debug(f"Ignoring non-text commonName of type {type(value).__name__}")
            return None
        return value

    def __repr__(self):
        return f"X509Certificate(subject={self.cert.subject.rfc4514_string()!r})"


def load_certificate(data: bytes) -> X509Certificate:
    """Decode a PEM or DER certificate, detected by content."""
    if PEM_CERTIFICATE_MARKER in data:
        return X509Certificate.from_pem(data)
    return X509Certificate.from_der(data)


def load_certificate_file(file_path: str) -> X509Certificate:
    """
    Load a certificate from a PEM or DER file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a certificate
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Certificate file not found: {file_path}")

    with open(file_path, 'rb') as f:
        content = f.read()

    if not content.strip():
        raise ValueError(f"Certificate file is empty: {file_path}")

    return load_certificate(content)
