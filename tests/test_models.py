"""
测试数据模型
"""

from datetime import datetime, timedelta, timezone

import pytest

from alipay_gateway.constants import AlipayResponse
from alipay_gateway.models import (
    AlipayCommonResult,
    AlipayError,
    CertificateInfo,
    ConfigurationError,
    DecryptionError,
    ErrorCode,
    KeyFormatError,
    TradeStatus,
    V3SignedHeaders,
)


class TestAlipayCommonResult:
    """网关通用结果测试"""

    def test_from_caller_shape(self):
        """接受 SDK 返回的驼峰结果"""
        result = AlipayCommonResult.model_validate(
            {"code": "10000", "msg": "Success", "tradeNo": "T1", "tradeStatus": "TRADE_SUCCESS"}
        )
        assert result.is_success
        assert result.trade_no == "T1"
        assert TradeStatus(result.trade_status) is TradeStatus.TRADE_SUCCESS

    def test_business_failure(self):
        result = AlipayCommonResult.model_validate(
            {"code": "40004", "msg": "Business Failed", "sub_code": "ACQ.TRADE_NOT_EXIST"}
        )
        assert not result.is_success
        assert result.sub_code == "ACQ.TRADE_NOT_EXIST"

    def test_camel_error_fields(self):
        """驼峰错误字段映射到下划线属性"""
        result = AlipayCommonResult.model_validate(
            {"code": "40004", "subCode": "ACQ.TRADE_NOT_EXIST", "subMsg": "交易不存在"}
        )
        assert result.sub_code == "ACQ.TRADE_NOT_EXIST"
        assert result.sub_msg == "交易不存在"


class TestV3SignedHeaders:
    """V3 签名头模型测试"""

    def test_dump(self):
        headers = V3SignedHeaders(timestamp="1", nonce="n", signature="s")
        assert headers.model_dump() == {"timestamp": "1", "nonce": "n", "signature": "s"}


class TestCertificateInfo:
    """证书描述测试"""

    def test_validity_window(self):
        now = datetime.now(timezone.utc)
        info = CertificateInfo(
            serial_number="ABC",
            content="",
            not_before=now - timedelta(days=1),
            not_after=now + timedelta(days=1),
            issuer="CN=a",
            subject="CN=a",
        )
        assert info.is_valid(now)
        assert not info.is_valid(now + timedelta(days=2))
        assert info.is_expired(now + timedelta(days=2))
        assert not info.is_valid(now - timedelta(days=2))
        assert not info.is_expired(now - timedelta(days=2))


class TestErrors:
    """异常层级测试"""

    def test_codes(self):
        assert ConfigurationError("x").code == ErrorCode.CONFIG_ERROR
        assert KeyFormatError("x").code == ErrorCode.INVALID_KEY
        assert DecryptionError("x").code == ErrorCode.DECRYPT_ERROR
        assert AlipayError("x", code=ErrorCode.MISSING_PARAMETER).code == ErrorCode.MISSING_PARAMETER

    def test_hierarchy(self):
        assert issubclass(KeyFormatError, ConfigurationError)
        with pytest.raises(AlipayError):
            raise DecryptionError("bad")

    def test_response_key(self):
        assert AlipayResponse.response_key("alipay.trade.pay") == "alipay_trade_pay_response"
