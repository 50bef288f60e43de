"""
测试证书工具与证书管理器
"""

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509

from alipay_gateway.models.errors import CertificateError
from alipay_gateway.utils.cert_utils import CertificateManager, CertUtils, _rolling_hash_hex
from alipay_gateway.utils.rsa_signer import sign, verify
from conftest import strip_pem_lines


class TestRollingHash:
    """序列号哈希测试"""

    def test_known_values(self):
        assert _rolling_hash_hex(b"") == "0"
        assert _rolling_hash_hex(b"a") == "61"
        assert _rolling_hash_hex(b"ab") == format(97 * 31 + 98, "X")

    def test_only_first_100_bytes(self):
        data = bytes(range(100))
        assert _rolling_hash_hex(data) == _rolling_hash_hex(data + b"tail")

    def test_signed_overflow_uses_absolute_value(self):
        """溢出为负数时取绝对值"""
        value = _rolling_hash_hex(b"\xff" * 100)
        assert value == value.upper()
        assert int(value, 16) <= 0x80000000


class TestCertSerialNumber:
    """证书序列号测试"""

    def test_stable(self, alipay_cert):
        sn = CertUtils.get_cert_serial_number(alipay_cert)
        assert sn == CertUtils.get_cert_serial_number(alipay_cert)
        assert sn == sn.upper()

    def test_whitespace_insensitive(self, alipay_cert):
        """PEM 换行与头尾不影响结果"""
        assert CertUtils.get_cert_serial_number(
            strip_pem_lines(alipay_cert)
        ) == CertUtils.get_cert_serial_number(alipay_cert)

    def test_different_certs(self, alipay_cert, app_cert):
        assert CertUtils.get_cert_serial_number(alipay_cert) != CertUtils.get_cert_serial_number(
            app_cert
        )

    def test_multiple_certs_joined(self, alipay_cert, root_cert):
        """根证书文件中的多张证书以下划线连接"""
        sn = CertUtils.get_cert_serial_number(root_cert)
        parts = sn.split("_")
        assert len(parts) == 2
        assert parts[0] == CertUtils.get_cert_serial_number(alipay_cert)

    def test_empty_content(self):
        with pytest.raises(CertificateError):
            CertUtils.get_cert_serial_number("")

    def test_try_get_returns_none(self):
        """推导失败时返回 None"""
        assert CertUtils.try_get_cert_serial_number("***not base64***") is None

    def test_x509_serial(self, alipay_cert, app_cert):
        assert CertUtils.get_x509_serial_number(alipay_cert) == "1A2B3C4D"
        assert CertUtils.get_x509_serial_number(app_cert) == "5E6F"


class TestCertificateParsing:
    """证书解析测试"""

    def test_parse_certificate(self, alipay_cert):
        info = CertUtils.parse_certificate(alipay_cert)
        assert info.serial_number == CertUtils.get_cert_serial_number(alipay_cert)
        assert info.content == alipay_cert
        assert "CN=alipay-public" in info.subject
        assert info.not_before < info.not_after
        assert info.is_valid()
        assert not info.is_expired()

    def test_parse_invalid(self):
        with pytest.raises(CertificateError):
            CertUtils.parse_certificate("QUJD")

    def test_verify_certificate(self, alipay_cert, expired_cert):
        assert CertUtils.verify_certificate(alipay_cert) is True
        assert CertUtils.verify_certificate(expired_cert) is False
        assert CertUtils.verify_certificate("garbage") is False

    def test_extract_public_key(self, alipay_cert, alipay_private_pem):
        """证书中提取的公钥可用于验签"""
        public_key = CertUtils.extract_public_key_from_cert(alipay_cert)
        signature = sign("a=1", alipay_private_pem)
        assert verify("a=1", signature, public_key) is True

    def test_fingerprint(self, alipay_cert):
        cert = x509.load_pem_x509_certificate(alipay_cert.encode())
        expected = cert.fingerprint(cert.signature_hash_algorithm).hex().upper()
        assert CertUtils.get_cert_fingerprint(alipay_cert) == expected

    def test_normalize_certificate(self, alipay_cert):
        normalized = CertUtils.normalize_certificate(strip_pem_lines(alipay_cert))
        assert normalized.startswith("-----BEGIN CERTIFICATE-----\n")
        assert normalized.strip() == alipay_cert.strip()

    def test_cert_chain(self, alipay_cert, app_cert, expired_cert):
        chain = CertUtils.build_cert_chain([strip_pem_lines(app_cert)])
        assert CertUtils.verify_cert_chain(chain, alipay_cert) is True
        assert CertUtils.verify_cert_chain([app_cert, expired_cert], alipay_cert) is False
        assert CertUtils.verify_cert_chain([app_cert], expired_cert) is False
        assert CertUtils.verify_cert_chain([], alipay_cert) is False


class TestCertificateManager:
    """证书管理器测试"""

    def test_add_and_get(self, alipay_cert):
        manager = CertificateManager()
        info = manager.add_certificate("sn1", alipay_cert)

        assert manager.get_certificate("sn1") == info
        assert "sn1" in manager
        assert manager.size() == 1
        assert len(manager) == 1

    def test_get_missing(self):
        assert CertificateManager().get_certificate("missing") is None

    def test_add_invalid(self):
        manager = CertificateManager()
        with pytest.raises(CertificateError):
            manager.add_certificate("bad", "not a cert")
        assert manager.size() == 0

    def test_remove(self, alipay_cert):
        manager = CertificateManager()
        manager.add_certificate("sn1", alipay_cert)
        assert manager.remove_certificate("sn1") is True
        assert manager.remove_certificate("sn1") is False

    def test_valid_and_expired(self, alipay_cert, expired_cert):
        """测试有效证书查询与过期清理"""
        manager = CertificateManager()
        manager.add_certificate("current", alipay_cert)
        manager.add_certificate("old", expired_cert)

        valid = manager.get_valid_certificates()
        assert [c.content for c in valid] == [alipay_cert]

        removed = manager.clean_expired_certificates()
        assert removed == ["old"]
        assert "old" not in manager
        assert manager.size() == 1

    def test_clean_at_future_time(self, alipay_cert):
        manager = CertificateManager()
        manager.add_certificate("current", alipay_cert)
        future = datetime.now(timezone.utc) + timedelta(days=400)
        assert manager.get_valid_certificates(future) == []
        assert manager.clean_expired_certificates(future) == ["current"]

    def test_clear(self, alipay_cert, app_cert):
        manager = CertificateManager()
        manager.add_certificate("a", alipay_cert)
        manager.add_certificate("b", app_cert)
        manager.clear()
        assert manager.size() == 0
