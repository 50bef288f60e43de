"""
测试RSA签名器

测试待签名字符串构建、签名与验签。
"""

import base64

import pytest

from alipay_gateway.models.errors import KeyFormatError
from alipay_gateway.utils.rsa_signer import (
    RSASigner,
    RSAVerifier,
    build_sign_content,
    sign,
    stringify_value,
    verify,
)
from conftest import strip_pem_lines


def flip_bit(signature: str) -> str:
    """翻转签名中的一个比特"""
    raw = bytearray(base64.b64decode(signature))
    raw[10] ^= 0x01
    return base64.b64encode(bytes(raw)).decode("ascii")


class TestBuildSignContent:
    """待签名字符串测试"""

    def test_basic_example(self):
        """测试排序、去除 sign 与空值"""
        params = {"b": "2", "a": "1", "sign": "x", "c": ""}
        assert build_sign_content(params) == "a=1&b=2"

    def test_none_skipped(self):
        assert build_sign_content({"a": None, "b": "v"}) == "b=v"

    def test_byte_order(self):
        """大写字母排在小写字母之前，下划线位于两者之间"""
        params = {"b": "1", "B": "2", "_a": "3", "a_b": "4", "ab": "5"}
        assert build_sign_content(params) == "B=2&_a=3&a_b=4&ab=5&b=1"

    def test_no_url_encoding(self):
        """值不做URL编码"""
        params = {"notify_url": "https://a.com/cb?x=1&y=2", "subject": "测试 商品"}
        assert build_sign_content(params) == (
            "notify_url=https://a.com/cb?x=1&y=2&subject=测试 商品"
        )

    def test_zero_and_false_kept(self):
        assert build_sign_content({"amount": 0, "flag": False}) == "amount=0&flag=false"

    def test_order_independent(self):
        p1 = {"app_id": "1", "method": "m", "charset": "utf-8"}
        p2 = {"charset": "utf-8", "method": "m", "app_id": "1"}
        assert build_sign_content(p1) == build_sign_content(p2)


class TestStringifyValue:
    """参数值渲染测试"""

    def test_values(self):
        assert stringify_value("a") == "a"
        assert stringify_value(True) == "true"
        assert stringify_value(10) == "10"
        assert stringify_value({"k": "中"}) == '{"k":"中"}'
        assert stringify_value([1, 2]) == "[1,2]"


class TestRSASigner:
    """RSA签名与验签测试"""

    def test_sign_and_verify_rsa2(self, app_private_pem, app_public_pem):
        """测试 RSA2 签名可被对应公钥验证"""
        signature = sign("a=1&b=2", app_private_pem, "RSA2")
        assert verify("a=1&b=2", signature, app_public_pem, "RSA2") is True

    def test_sign_and_verify_rsa(self, app_private_pem, app_public_pem):
        """测试 RSA(SHA1) 签名"""
        signature = sign("a=1", app_private_pem, "RSA")
        assert verify("a=1", signature, app_public_pem, "RSA") is True
        assert verify("a=1", signature, app_public_pem, "RSA2") is False

    def test_signature_is_deterministic(self, app_private_pem):
        """PKCS#1 v1.5 签名是确定的"""
        assert sign("x", app_private_pem) == sign("x", app_private_pem)

    def test_signature_length(self, app_private_pem):
        """2048位密钥的签名为256字节"""
        assert len(base64.b64decode(sign("x", app_private_pem))) == 256

    def test_pkcs1_and_headerless_keys(self, app_private_pem, app_private_pkcs1_pem):
        """PKCS1、PKCS8 与去头尾格式得到相同签名"""
        expected = sign("content", app_private_pem, key_type="PKCS8")
        assert sign("content", app_private_pkcs1_pem, key_type="PKCS1") == expected
        assert sign("content", strip_pem_lines(app_private_pem), key_type="PKCS8") == expected
        assert (
            sign("content", strip_pem_lines(app_private_pkcs1_pem), key_type="PKCS1")
            == expected
        )

    def test_headerless_public_key(self, app_private_pem, app_public_pem):
        signature = sign("content", app_private_pem)
        assert verify("content", signature, strip_pem_lines(app_public_pem)) is True

    def test_tampered_signature(self, app_private_pem, app_public_pem):
        """测试篡改签名后验签失败"""
        signature = sign("a=1&b=2", app_private_pem)
        assert verify("a=1&b=2", flip_bit(signature), app_public_pem) is False

    def test_tampered_content(self, app_private_pem, app_public_pem):
        signature = sign("a=1&b=2", app_private_pem)
        assert verify("a=1&b=3", signature, app_public_pem) is False

    def test_wrong_public_key(self, app_private_pem, alipay_public_key):
        signature = sign("a=1", app_private_pem)
        assert verify("a=1", signature, alipay_public_key) is False

    def test_malformed_inputs_return_false(self, app_public_pem):
        """格式错误的签名或公钥返回 False，不抛出异常"""
        assert verify("a=1", "not base64!!", app_public_pem) is False
        assert verify("a=1", "", app_public_pem) is False
        assert verify("a=1", "AAAA", "invalid public key") is False
        assert verify("a=1", "AAAA", app_public_pem, "MD5") is False

    def test_bytes_content_returns_false(self, app_private_pem, app_public_pem):
        """待验签内容不是字符串时返回 False"""
        signature = sign("a=1", app_private_pem)
        assert verify(b"a=1", signature, app_public_pem) is False
        assert RSAVerifier(app_public_pem).verify(b"a=1", signature) is False

    def test_invalid_private_key(self):
        """测试无效私钥抛出 KeyFormatError"""
        with pytest.raises(KeyFormatError):
            RSASigner("not a key")

    def test_unknown_sign_type(self, app_private_pem):
        with pytest.raises(ValueError):
            RSASigner(app_private_pem, sign_type="MD5")

    def test_verifier_with_signer_public_key(self, app_private_pem, app_public_pem):
        signer = RSASigner(app_private_pem)
        verifier = RSAVerifier(app_public_pem)
        assert verifier.verify("hello", signer.sign("hello")) is True
