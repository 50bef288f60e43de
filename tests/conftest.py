"""
测试配置

添加 src 目录到 Python 导入路径，并提供测试用的密钥材料：
RSA 密钥对、自签名证书、AES 密钥与 SDK 配置。
"""

import base64
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# 将 src 目录添加到 Python 导入路径
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from alipay_gateway.models.config import AlipayConfig


def generate_rsa_key() -> rsa.RSAPrivateKey:
    """生成测试用RSA私钥"""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def private_key_pem(key: rsa.RSAPrivateKey, key_type: str = "PKCS8") -> str:
    """导出私钥PEM"""
    fmt = (
        serialization.PrivateFormat.PKCS8
        if key_type == "PKCS8"
        else serialization.PrivateFormat.TraditionalOpenSSL
    )
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=fmt,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def public_key_pem(key: rsa.RSAPrivateKey) -> str:
    """导出公钥PEM（SPKI）"""
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


def strip_pem_lines(pem: str) -> str:
    """去掉PEM头尾，得到控制台导出的单行格式"""
    return "".join(line for line in pem.strip().splitlines() if not line.startswith("-----"))


def generate_certificate(
    key: rsa.RSAPrivateKey,
    common_name: str = "alipay-test",
    not_before: datetime | None = None,
    not_after: datetime | None = None,
    serial_number: int = 0x1A2B3C4D,
) -> str:
    """生成自签名证书PEM"""
    now = datetime.now(timezone.utc)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(serial_number)
        .not_valid_before(not_before or now - timedelta(days=1))
        .not_valid_after(not_after or now + timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture(scope="session")
def app_key() -> rsa.RSAPrivateKey:
    """应用私钥"""
    return generate_rsa_key()


@pytest.fixture(scope="session")
def alipay_key() -> rsa.RSAPrivateKey:
    """模拟支付宝侧私钥（用于构造回调签名）"""
    return generate_rsa_key()


@pytest.fixture(scope="session")
def app_private_pem(app_key) -> str:
    return private_key_pem(app_key, "PKCS8")


@pytest.fixture(scope="session")
def app_private_pkcs1_pem(app_key) -> str:
    return private_key_pem(app_key, "PKCS1")


@pytest.fixture(scope="session")
def app_public_pem(app_key) -> str:
    return public_key_pem(app_key)


@pytest.fixture(scope="session")
def alipay_private_pem(alipay_key) -> str:
    return private_key_pem(alipay_key, "PKCS8")


@pytest.fixture(scope="session")
def alipay_public_key(alipay_key) -> str:
    """支付宝公钥（控制台导出的单行格式）"""
    return strip_pem_lines(public_key_pem(alipay_key))


@pytest.fixture(scope="session")
def alipay_cert(alipay_key) -> str:
    """支付宝公钥证书"""
    return generate_certificate(alipay_key, common_name="alipay-public")


@pytest.fixture(scope="session")
def app_cert(app_key) -> str:
    """应用公钥证书"""
    return generate_certificate(app_key, common_name="app-public", serial_number=0x5E6F)


@pytest.fixture(scope="session")
def root_cert(alipay_key, alipay_cert) -> str:
    """根证书文件（两张证书）"""
    second = generate_certificate(alipay_key, common_name="alipay-root", serial_number=0x77)
    return alipay_cert + second


@pytest.fixture(scope="session")
def expired_cert(app_key) -> str:
    """已过期证书"""
    now = datetime.now(timezone.utc)
    return generate_certificate(
        app_key,
        common_name="expired",
        not_before=now - timedelta(days=30),
        not_after=now - timedelta(days=1),
        serial_number=0x99,
    )


@pytest.fixture
def aes_key() -> str:
    """base64 编码的 AES-128 密钥"""
    return base64.b64encode(os.urandom(16)).decode("ascii")


@pytest.fixture
def config(app_private_pem, alipay_public_key) -> AlipayConfig:
    """公钥模式的SDK配置"""
    return AlipayConfig(
        app_id="2021000000000001",
        private_key=app_private_pem,
        alipay_public_key=alipay_public_key,
    )


@pytest.fixture
def cert_config(app_private_pem, app_cert, alipay_cert, root_cert) -> AlipayConfig:
    """证书模式的SDK配置"""
    return AlipayConfig(
        app_id="2021000000000001",
        private_key=app_private_pem,
        app_cert_content=app_cert,
        alipay_public_cert_content=alipay_cert,
        alipay_root_cert_content=root_cert,
    )
