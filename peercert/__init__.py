"""
Hostname verification for TLS peer certificates.
"""

__version__ = "0.1.0"
