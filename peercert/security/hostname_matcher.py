"""
DNS name matching between a certificate name pattern and a requested hostname.

Patterns come from the certificate (a subjectAltName dNSName entry or the
subject commonName) and are attacker-influenced. Only one wildcard form is
honoured: ``*`` as the entire left-most label, followed by at least two more
labels (``*.example.com``). Every other ``*`` is an ordinary character, so
``f*o.example.com``, ``www.*.example.com`` and ``*.com`` can only match a
hostname that spells them out literally.
"""
from typing import Any, List, Optional


WILDCARD_LABEL = "*"

# Labels that must follow a wildcard label for it to be expanded.
MIN_LABELS_AFTER_WILDCARD = 2

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def normalize_name(name: str) -> str:
    """Lower-case ASCII letters only; other characters are left untouched."""
    return name.translate(_ASCII_LOWER)


def split_labels(name: str) -> Optional[List[str]]:
    """
    Split a DNS name into labels.

    Returns None when the name is empty or contains an empty label.
    """
    if not name:
        return None
    labels = name.split(".")
    if any(not label for label in labels):
        return None
    return labels


def is_wildcard_pattern(pattern: Any) -> bool:
    """Check whether a pattern carries an expandable left-most wildcard."""
    if not isinstance(pattern, str):
        return False
    labels = split_labels(normalize_name(pattern))
    if labels is None:
        return False
    return labels[0] == WILDCARD_LABEL and len(labels) - 1 >= MIN_LABELS_AFTER_WILDCARD


def _normalize_hostname(hostname: str) -> Optional[List[str]]:
    # A trailing dot leaves an empty last label, which split_labels rejects.
    if WILDCARD_LABEL in hostname:
        return None
    return split_labels(normalize_name(hostname))


def matches(pattern: Any, hostname: Any, allow_wildcards: bool = True) -> bool:
    """
    Check whether a certificate name pattern covers a hostname.

    Args:
        pattern: Name taken from the certificate (SAN dNSName or CN)
        hostname: Host the caller wants to talk to
        allow_wildcards: Compare every pattern literally when False

    Returns:
        True if the hostname is covered by the pattern, False otherwise,
        including for malformed or non-string input
    """
    if not isinstance(pattern, str) or not isinstance(hostname, str):
        return False

    pattern_labels = split_labels(normalize_name(pattern))
    host_labels = _normalize_hostname(hostname)
    if pattern_labels is None or host_labels is None:
        return False

    if len(pattern_labels) != len(host_labels):
        return False

    wildcard = allow_wildcards and is_wildcard_pattern(pattern)

    for index, (pattern_label, host_label) in enumerate(zip(pattern_labels, host_labels)):
        if index == 0 and wildcard:
            # split_labels already guarantees the host label is non-empty
            continue
        if pattern_label != host_label:
            return False

    return True


class HostnameMatcher:
    """Matcher bound to a wildcard policy, for use by the name verifier."""

    def __init__(self, allow_wildcards: bool = True):
        self.allow_wildcards = allow_wildcards

    def matches(self, pattern: Any, hostname: Any) -> bool:
        return matches(pattern, hostname, allow_wildcards=self.allow_wildcards)

    def first_match(self, patterns, hostname: Any) -> Optional[str]:
        """Return the first pattern covering the hostname, or None."""
        for pattern in patterns:
            if self.matches(pattern, hostname):
                return pattern
        return None
