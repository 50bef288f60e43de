"""
常用业务接口封装

每个方法只负责校验必填字段并组装 bizContent，实际请求由 AlipaySdk.exec 完成。
必填字段以显式参数给出，其余业务字段通过关键字参数透传（驼峰或下划线均可）。

接口文档: https://opendocs.alipay.com/open/api
"""

from typing import TYPE_CHECKING, Any, Optional

from ..models.errors import AlipayError, ErrorCode
from ..models.payload import JsonObject
from ..utils.case_utils import remove_empty_values
from ..utils.helpers import format_amount

if TYPE_CHECKING:
    from .alipay_client import AlipaySdk


class AlipayApis:
    """业务接口集合

    通过 sdk.apis 访问:
        result = await sdk.apis.trade_query(out_trade_no="ORDER_1")
    """

    def __init__(self, sdk: "AlipaySdk") -> None:
        self._sdk = sdk

    async def _exec(self, method: str, biz_content: JsonObject) -> dict[str, Any]:
        return await self._sdk.exec(method, {"bizContent": remove_empty_values(biz_content)})

    @staticmethod
    def _require_one_of(biz_content: dict[str, Any], *keys: str) -> None:
        """至少提供其中一个字段"""
        if not any(biz_content.get(key) for key in keys):
            raise AlipayError(
                f"{' 和 '.join(keys)} 不能同时为空", code=ErrorCode.MISSING_PARAMETER
            )

    # ==================== 交易 ====================

    async def trade_pay(
        self,
        out_trade_no: str,
        total_amount: Any,
        subject: str,
        auth_code: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易支付（当面付条码支付）

        Args:
            out_trade_no: 商户订单号
            total_amount: 订单金额（元），格式化为两位小数
            subject: 订单标题
            auth_code: 用户付款码
            **params: 其他业务字段，如 scene、product_code
        """
        biz = {
            "out_trade_no": out_trade_no,
            "total_amount": format_amount(total_amount),
            "subject": subject,
            **params,
        }
        if auth_code:
            biz["auth_code"] = auth_code
        return await self._exec("alipay.trade.pay", biz)

    async def trade_precreate(
        self, out_trade_no: str, total_amount: Any, subject: str, **params: Any
    ) -> dict[str, Any]:
        """统一收单线下交易预创建（生成二维码）"""
        biz = {
            "out_trade_no": out_trade_no,
            "total_amount": format_amount(total_amount),
            "subject": subject,
            **params,
        }
        return await self._exec("alipay.trade.precreate", biz)

    async def trade_create(
        self, out_trade_no: str, total_amount: Any, subject: str, **params: Any
    ) -> dict[str, Any]:
        """统一收单交易创建"""
        biz = {
            "out_trade_no": out_trade_no,
            "total_amount": format_amount(total_amount),
            "subject": subject,
            **params,
        }
        return await self._exec("alipay.trade.create", biz)

    async def trade_query(
        self,
        out_trade_no: Optional[str] = None,
        trade_no: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易查询

        Raises:
            AlipayError: out_trade_no 和 trade_no 均未提供
        """
        biz = {"out_trade_no": out_trade_no, "trade_no": trade_no, **params}
        self._require_one_of(biz, "out_trade_no", "trade_no")
        return await self._exec("alipay.trade.query", biz)

    async def trade_cancel(
        self,
        out_trade_no: Optional[str] = None,
        trade_no: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易撤销"""
        biz = {"out_trade_no": out_trade_no, "trade_no": trade_no, **params}
        self._require_one_of(biz, "out_trade_no", "trade_no")
        return await self._exec("alipay.trade.cancel", biz)

    async def trade_close(
        self,
        out_trade_no: Optional[str] = None,
        trade_no: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易关闭"""
        biz = {"out_trade_no": out_trade_no, "trade_no": trade_no, **params}
        self._require_one_of(biz, "out_trade_no", "trade_no")
        return await self._exec("alipay.trade.close", biz)

    async def trade_refund(
        self,
        refund_amount: Any,
        out_trade_no: Optional[str] = None,
        trade_no: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易退款

        Args:
            refund_amount: 退款金额（元）
            out_trade_no: 商户订单号
            trade_no: 支付宝交易号
            **params: 其他业务字段，如 out_request_no（部分退款必填）
        """
        biz = {
            "out_trade_no": out_trade_no,
            "trade_no": trade_no,
            "refund_amount": format_amount(refund_amount),
            **params,
        }
        self._require_one_of(biz, "out_trade_no", "trade_no")
        return await self._exec("alipay.trade.refund", biz)

    async def trade_refund_query(
        self,
        out_request_no: str,
        out_trade_no: Optional[str] = None,
        trade_no: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易退款查询"""
        biz = {
            "out_trade_no": out_trade_no,
            "trade_no": trade_no,
            "out_request_no": out_request_no,
            **params,
        }
        self._require_one_of(biz, "out_trade_no", "trade_no")
        return await self._exec("alipay.trade.fastpay.refund.query", biz)

    async def trade_orderinfo_sync(
        self, trade_no: str, out_request_no: str, biz_type: str, **params: Any
    ) -> dict[str, Any]:
        """支付宝订单信息同步"""
        biz = {
            "trade_no": trade_no,
            "out_request_no": out_request_no,
            "biz_type": biz_type,
            **params,
        }
        return await self._exec("alipay.trade.orderinfo.sync", biz)

    async def data_bill_downloadurl_query(
        self, bill_type: str, bill_date: str, **params: Any
    ) -> dict[str, Any]:
        """查询对账单下载地址

        Args:
            bill_type: 账单类型，trade 或 signcustomer
            bill_date: 账单时间，日账单 yyyy-MM-dd，月账单 yyyy-MM
        """
        biz = {"bill_type": bill_type, "bill_date": bill_date, **params}
        return await self._exec("alipay.data.dataservice.bill.downloadurl.query", biz)

    async def trade_settle(
        self,
        out_request_no: str,
        trade_no: str,
        royalty_parameters: list[dict[str, Any]],
        **params: Any,
    ) -> dict[str, Any]:
        """统一收单交易结算（分账）"""
        biz = {
            "out_request_no": out_request_no,
            "trade_no": trade_no,
            "royalty_parameters": royalty_parameters,
            **params,
        }
        return await self._exec("alipay.trade.order.settle", biz)

    # ==================== 用户与授权 ====================

    async def user_info_share(self, auth_token: str) -> dict[str, Any]:
        """支付宝会员授权信息查询

        auth_token 是公共参数而不是业务参数。
        """
        return await self._sdk.exec("alipay.user.info.share", {"auth_token": auth_token})

    async def system_oauth_token(
        self,
        grant_type: str,
        code: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """换取授权访问令牌

        Args:
            grant_type: authorization_code 或 refresh_token
            code: 授权码（grant_type=authorization_code 时必填）
            refresh_token: 刷新令牌（grant_type=refresh_token 时必填）
        """
        params = {"grant_type": grant_type, "code": code, "refresh_token": refresh_token}
        self._require_one_of(params, "code", "refresh_token")
        return await self._sdk.exec("alipay.system.oauth.token", params)

    async def open_auth_token_app(
        self,
        grant_type: str,
        code: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """换取应用授权令牌（第三方应用代调用）"""
        biz = {"grant_type": grant_type, "code": code, "refresh_token": refresh_token}
        self._require_one_of(biz, "code", "refresh_token")
        return await self._exec("alipay.open.auth.token.app", biz)

    # ==================== 资金 ====================

    async def fund_trans_toaccount_transfer(
        self,
        out_biz_no: str,
        payee_type: str,
        payee_account: str,
        amount: Any,
        **params: Any,
    ) -> dict[str, Any]:
        """单笔转账到支付宝账户"""
        biz = {
            "out_biz_no": out_biz_no,
            "payee_type": payee_type,
            "payee_account": payee_account,
            "amount": format_amount(amount),
            **params,
        }
        return await self._exec("alipay.fund.trans.toaccount.transfer", biz)

    async def fund_trans_common_query(
        self,
        out_biz_no: Optional[str] = None,
        order_id: Optional[str] = None,
        **params: Any,
    ) -> dict[str, Any]:
        """转账业务单据查询"""
        biz = {"out_biz_no": out_biz_no, "order_id": order_id, **params}
        self._require_one_of(biz, "out_biz_no", "order_id")
        return await self._exec("alipay.fund.trans.common.query", biz)

    # ==================== 营销 ====================

    async def marketing_campaign_cash_create(
        self,
        coupon_name: str,
        prize_type: str,
        total_money: Any,
        total_num: int,
        prize_msg: str,
        start_time: str,
        end_time: str,
        **params: Any,
    ) -> dict[str, Any]:
        """创建现金活动"""
        biz = {
            "coupon_name": coupon_name,
            "prize_type": prize_type,
            "total_money": format_amount(total_money),
            "total_num": total_num,
            "prize_msg": prize_msg,
            "start_time": start_time,
            "end_time": end_time,
            **params,
        }
        return await self._exec("alipay.marketing.campaign.cash.create", biz)

    async def pass_template_add(
        self, unique_id: str, tpl_content: Any, **params: Any
    ) -> dict[str, Any]:
        """卡券模板创建

        Args:
            unique_id: 商户用于控制模板的唯一性
            tpl_content: 模板内容（JSON对象或已序列化的字符串）
        """
        biz = {"unique_id": unique_id, "tpl_content": tpl_content, **params}
        return await self._exec("alipay.pass.template.add", biz)

    async def pass_instance_add(
        self,
        tpl_id: str,
        tpl_params: Any,
        recognition_type: str,
        recognition_info: Any,
        **params: Any,
    ) -> dict[str, Any]:
        """卡券实例发放"""
        biz = {
            "tpl_id": tpl_id,
            "tpl_params": tpl_params,
            "recognition_type": recognition_type,
            "recognition_info": recognition_info,
            **params,
        }
        return await self._exec("alipay.pass.instance.add", biz)
