"""
Security models for peer certificate hostname verification.
"""
from dataclasses import dataclass, field
from typing import List, Optional


NAME_SOURCE_SAN = "san"
NAME_SOURCE_CN = "cn"


@dataclass
class CertificateNames:
    """Identities a certificate claims."""
    dns_names: List[str] = field(default_factory=list)
    common_name: Optional[str] = None
    has_subject_alt_names: bool = False


@dataclass
class VerificationResult:
    """Result of checking a certificate against a requested hostname."""
    is_authorized: bool
    hostname: str
    matched_name: Optional[str] = None
    source: Optional[str] = None
    error_message: Optional[str] = None

    def __bool__(self):
        return self.is_authorized
