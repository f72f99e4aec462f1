"""
Tests for the SAN-first / CN-fallback hostname verification policy.
"""
import unittest
from unittest.mock import Mock

from peercert.models.config import Config
from peercert.security.certificate import Certificate, StaticCertificate, X509Certificate
from peercert.security.models import VerificationResult
from peercert.security.name_verifier import CertificateNameVerifier

from cert_helpers import create_test_cert


SAN_NAMES = ["foo.test", "*.bar.test", "test.webrtc.org"]
LEGACY_CN = "*.webrtc.org"


class VerifierScenarios:
    """Shared scenarios, run against synthetic and real certificates."""

    def make_cert(self, dns_names=(), common_name=None) -> Certificate:
        raise NotImplementedError

    def setUp(self):
        self.verifier = CertificateNameVerifier()
        self.cert = self.make_cert(dns_names=SAN_NAMES, common_name=LEGACY_CN)
        self.legacy_cert = self.make_cert(common_name=LEGACY_CN)

    def test_each_san_entry_is_valid(self):
        self.assertTrue(self.verifier.verify(self.cert, "foo.test"))
        self.assertTrue(self.verifier.verify(self.cert, "a.bar.test"))
        self.assertTrue(self.verifier.verify(self.cert, "b.bar.test"))
        self.assertTrue(self.verifier.verify(self.cert, "test.webrtc.org"))

    def test_cn_ignored_when_san_present(self):
        self.assertFalse(self.verifier.verify(self.cert, "www.webrtc.org"))

    def test_san_wildcard_edge_cases(self):
        self.assertFalse(self.verifier.verify(self.cert, "a.b.bar.test"))
        self.assertFalse(self.verifier.verify(self.cert, "notbar.test"))
        self.assertFalse(self.verifier.verify(self.cert, "bar.test"))

    def test_legacy_cn_fallback(self):
        self.assertTrue(self.verifier.verify(self.legacy_cert, "www.webrtc.org"))
        self.assertTrue(self.verifier.verify(self.legacy_cert, "alice.webrtc.org"))
        self.assertTrue(self.verifier.verify(self.legacy_cert, "bob.webrtc.org"))

    def test_legacy_cn_wildcard_edge_cases(self):
        self.assertFalse(self.verifier.verify(self.legacy_cert, "a.b.webrtc.org"))
        self.assertFalse(self.verifier.verify(self.legacy_cert, "notwebrtc.org"))
        self.assertFalse(self.verifier.verify(self.legacy_cert, "webrtc.org"))

    def test_no_san_and_no_cn(self):
        cert = self.make_cert()
        for hostname in ["foo.test", "www.webrtc.org", "localhost"]:
            self.assertFalse(self.verifier.verify(cert, hostname))

    def test_detailed_result_reports_source(self):
        result = self.verifier.verify_detailed(self.cert, "a.bar.test")
        self.assertTrue(result.is_authorized)
        self.assertEqual(result.matched_name, "*.bar.test")
        self.assertEqual(result.source, "san")

        result = self.verifier.verify_detailed(self.legacy_cert, "alice.webrtc.org")
        self.assertTrue(result.is_authorized)
        self.assertEqual(result.matched_name, LEGACY_CN)
        self.assertEqual(result.source, "cn")

    def test_detailed_result_on_rejection(self):
        result = self.verifier.verify_detailed(self.cert, "www.webrtc.org")
        self.assertFalse(result.is_authorized)
        self.assertIsNone(result.matched_name)
        self.assertIsNone(result.source)
        self.assertIn("subjectAltName", result.error_message)


class TestVerifierWithStaticCertificates(VerifierScenarios, unittest.TestCase):
    """Scenarios against in-memory certificates."""

    def make_cert(self, dns_names=(), common_name=None):
        return StaticCertificate(dns_names=dns_names, common_name=common_name)


class TestVerifierWithX509Certificates(VerifierScenarios, unittest.TestCase):
    """Scenarios against certificates built with cryptography."""

    def make_cert(self, dns_names=(), common_name=None):
        cert, _ = create_test_cert(common_name=common_name, dns_names=dns_names)
        return X509Certificate(cert)

    def test_ip_only_san_falls_back_to_cn(self):
        cert, _ = create_test_cert(common_name=LEGACY_CN, ip_addresses=["192.0.2.1"])
        self.assertTrue(self.verifier.verify(X509Certificate(cert), "www.webrtc.org"))

    def test_last_common_name_is_used(self):
        from cryptography import x509
        from cryptography.x509.oid import NameOID

        cert, _ = create_test_cert(common_name="first.example.com")
        cert_view = X509Certificate(cert)
        cert_view.cert = Mock()
        cert_view.cert.subject.get_attributes_for_oid.return_value = [
            x509.NameAttribute(NameOID.COMMON_NAME, "first.example.com"),
            x509.NameAttribute(NameOID.COMMON_NAME, "second.example.com"),
        ]
        cert_view.cert.extensions.get_extension_for_class.side_effect = x509.ExtensionNotFound(
            "no san", x509.SubjectAlternativeName.oid
        )

        self.assertTrue(self.verifier.verify(cert_view, "second.example.com"))
        self.assertFalse(self.verifier.verify(cert_view, "first.example.com"))


class TestVerifierPolicy(unittest.TestCase):
    """Policy details that do not depend on the certificate backend."""

    def setUp(self):
        self.verifier = CertificateNameVerifier()

    def test_no_certificate(self):
        for hostname in ["webrtc.org", "foo.test", ""]:
            self.assertFalse(self.verifier.verify(None, hostname))

        result = self.verifier.verify_detailed(None, "webrtc.org")
        self.assertIsInstance(result, VerificationResult)
        self.assertEqual(result.error_message, "No peer certificate")

    def test_cn_never_read_when_san_present(self):
        cert = Mock(spec=Certificate)
        cert.has_subject_alt_names.return_value = True
        cert.subject_alt_dns_names.return_value = ["foo.test"]
        cert.common_name.return_value = "www.webrtc.org"

        self.assertFalse(self.verifier.verify(cert, "www.webrtc.org"))
        cert.common_name.assert_not_called()

    def test_accessor_error_fails_closed(self):
        cert = Mock(spec=Certificate)
        cert.has_subject_alt_names.side_effect = ValueError("malformed subjectAltName")

        result = self.verifier.verify_detailed(cert, "foo.test")

        self.assertFalse(result.is_authorized)
        self.assertIn("malformed subjectAltName", result.error_message)
        cert.common_name.assert_not_called()

    def test_malformed_san_entries_do_not_match(self):
        cert = StaticCertificate(dns_names=["", "a..test", None, "*.", "foo.test"])
        self.assertFalse(self.verifier.verify(cert, "a..test"))
        self.assertFalse(self.verifier.verify(cert, "x.test"))
        self.assertTrue(self.verifier.verify(cert, "foo.test"))

    def test_hostname_normalized(self):
        cert = StaticCertificate(dns_names=SAN_NAMES)
        self.assertTrue(self.verifier.verify(cert, "FOO.Test"))
        self.assertTrue(self.verifier.verify(cert, "A.BAR.TEST"))

    def test_trailing_dot_hostname_rejected(self):
        cert = StaticCertificate(dns_names=["foo.test"])
        self.assertFalse(self.verifier.verify(cert, "foo.test."))

    def test_cn_fallback_disabled(self):
        verifier = CertificateNameVerifier(Config(legacy_common_name_fallback=False))
        legacy_cert = StaticCertificate(common_name=LEGACY_CN)

        self.assertFalse(verifier.verify(legacy_cert, "www.webrtc.org"))
        self.assertTrue(verifier.verify(StaticCertificate(dns_names=SAN_NAMES), "foo.test"))

    def test_wildcards_disabled(self):
        verifier = CertificateNameVerifier(Config(allow_wildcards=False))
        cert = StaticCertificate(dns_names=SAN_NAMES)

        self.assertFalse(verifier.verify(cert, "a.bar.test"))
        self.assertTrue(verifier.verify(cert, "foo.test"))

    def test_verify_is_repeatable(self):
        cert = StaticCertificate(dns_names=SAN_NAMES, common_name=LEGACY_CN)
        results = [self.verifier.verify(cert, "a.bar.test") for _ in range(3)]
        self.assertEqual(results, [True, True, True])
        self.assertEqual(cert.subject_alt_dns_names(), SAN_NAMES)

    def test_result_is_truthy_like_decision(self):
        cert = StaticCertificate(dns_names=SAN_NAMES)
        self.assertTrue(self.verifier.verify_detailed(cert, "foo.test"))
        self.assertFalse(self.verifier.verify_detailed(cert, "bar.test"))


if __name__ == '__main__':
    unittest.main()
