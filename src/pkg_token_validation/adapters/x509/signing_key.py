from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from cryptography import x509
from cryptography.hazmat.primitives import hashes


@dataclass(frozen=True, slots=True)
class X509SigningKey:
    """
    Signing key backed by an X.509 certificate.

    The certificate's own validity period is the key's validity window.
    """
    certificate: x509.Certificate

    @classmethod
    def from_pem(cls, data: bytes) -> "X509SigningKey":
        return cls(x509.load_pem_x509_certificate(data))

    @classmethod
    def from_der(cls, data: bytes) -> "X509SigningKey":
        return cls(x509.load_der_x509_certificate(data))

    @property
    def key_id(self) -> str:
        # SHA-1 thumbprint, as used for the JOSE "x5t" header.
        return self.certificate.fingerprint(hashes.SHA1()).hex()

    @property
    def not_before(self) -> datetime:
        return self.certificate.not_valid_before_utc

    @property
    def not_after(self) -> datetime:
        return self.certificate.not_valid_after_utc

    def __str__(self) -> str:
        return f"{self.certificate.subject.rfc4514_string()} ({self.key_id})"
