"""TLS secret inspection."""

import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Optional

from cryptography import x509
from cryptography.x509.oid import NameOID

from .config import TLS_CERT_KEY, TLS_PRIVATE_KEY_KEY
from .errors import CertificateError

logger = logging.getLogger(__name__)


def _secret_field(secret, key: str) -> Optional[bytes]:
    data = secret.data or {}
    value = data.get(key)
    if not value:
        return None
    try:
        return base64.b64decode(value)
    except (binascii.Error, ValueError) as e:
        raise CertificateError(f"{key} is not valid base64: {e}") from e


def load_certificate(pem_bytes: bytes) -> x509.Certificate:
    """Parse PEM bytes as an X.509 certificate."""
    try:
        return x509.load_pem_x509_certificate(pem_bytes)
    except ValueError as e:
        raise CertificateError(f"failed to parse certificate: {e}") from e


def common_name(cert: x509.Certificate) -> str:
    attributes = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attributes:
        return ""
    return attributes[0].value


def verify_tls_secret(secret, hostname: str, now: Optional[datetime] = None) -> bool:
    """
    Check a kubernetes.io/tls secret.
    
    The secret must hold both a certificate and a private key, the
    certificate must be inside its validity window and its subject CN must
    equal hostname.
    
    Returns:
        True if all checks pass, False if any is not met yet
        
    Raises:
        CertificateError: the certificate data is not valid PEM X.509
    """
    name = secret.metadata.name if secret.metadata else ""
    cert_pem = _secret_field(secret, TLS_CERT_KEY)
    key_pem = _secret_field(secret, TLS_PRIVATE_KEY_KEY)
    
    if not cert_pem or not key_pem:
        logger.debug(f"Secret {name} is missing {TLS_CERT_KEY} or {TLS_PRIVATE_KEY_KEY}")
        return False
    
    cert = load_certificate(cert_pem)
    now = now or datetime.now(timezone.utc)
    
    if now < cert.not_valid_before_utc or now > cert.not_valid_after_utc:
        logger.debug(
            f"Certificate in {name} is outside its validity window "
            f"({cert.not_valid_before_utc} - {cert.not_valid_after_utc})"
        )
        return False
    
    cn = common_name(cert)
    if cn != hostname:
        logger.debug(f"Certificate in {name} has CN {cn!r}, want {hostname!r}")
        return False
    
    return True
