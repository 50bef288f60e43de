"""
环境变量配置与日志初始化

通过环境变量配置（前缀默认 ALIPAY_）：
- ALIPAY_APP_ID: 应用ID
- ALIPAY_PRIVATE_KEY / ALIPAY_PRIVATE_KEY_PATH: 应用私钥（内容或文件路径）
- ALIPAY_SIGN_TYPE: RSA 或 RSA2（默认RSA2）
- ALIPAY_KEY_TYPE: PKCS1 或 PKCS8（默认PKCS8）
- ALIPAY_PUBLIC_KEY / ALIPAY_PUBLIC_KEY_PATH: 支付宝公钥
- ALIPAY_APP_CERT / ALIPAY_APP_CERT_PATH: 应用公钥证书
- ALIPAY_PUBLIC_CERT / ALIPAY_PUBLIC_CERT_PATH: 支付宝公钥证书
- ALIPAY_ROOT_CERT / ALIPAY_ROOT_CERT_PATH: 支付宝根证书
- ALIPAY_ENCRYPT_KEY: AES密钥（可选）
- ALIPAY_GATEWAY / ALIPAY_ENDPOINT: 网关地址（可选）
- ALIPAY_TIMEOUT: 请求超时时间（秒）
- ALIPAY_PROXY_URL: HTTP代理地址（可选）
- ALIPAY_STRICT_CERT: 证书SN推导失败时是否报错（true/false）
- LOG_LEVEL: 日志级别（默认INFO）
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .models.config import AlipayConfig
from .models.errors import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 环境变量名（去前缀） -> 配置字段；支持 *_PATH 形式从文件读取
_FILE_VARIABLES = {
    "PRIVATE_KEY": "private_key",
    "PUBLIC_KEY": "alipay_public_key",
    "APP_CERT": "app_cert_content",
    "PUBLIC_CERT": "alipay_public_cert_content",
    "ROOT_CERT": "alipay_root_cert_content",
}

_PLAIN_VARIABLES = {
    "APP_ID": "app_id",
    "SIGN_TYPE": "sign_type",
    "KEY_TYPE": "key_type",
    "ENCRYPT_KEY": "encrypt_key",
    "GATEWAY": "gateway",
    "ENDPOINT": "endpoint",
    "TIMEOUT": "timeout",
    "PROXY_URL": "proxy_url",
    "STRICT_CERT": "strict_cert",
    "CAMELCASE": "camelcase",
}


def configure_logging(level: Optional[str] = None) -> None:
    """初始化日志

    Args:
        level: 日志级别名称，默认读取 LOG_LEVEL 环境变量（INFO）
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )


def _read_file(path: str) -> str:
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"无法读取文件 {path}: {e}") from e


def load_config_from_env(
    prefix: str = "ALIPAY_",
    env_file: Optional[str] = None,
) -> AlipayConfig:
    """从环境变量构建 AlipayConfig

    内容变量优先于 *_PATH 文件变量。

    Args:
        prefix: 环境变量前缀
        env_file: .env 文件路径（默认在当前目录向上查找）

    Returns:
        配置对象

    Raises:
        ConfigurationError: *_PATH 指向的文件无法读取
        pydantic.ValidationError: 缺少必填字段或取值不合法
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    data: dict[str, str] = {}
    for name, field in _PLAIN_VARIABLES.items():
        value = os.getenv(f"{prefix}{name}")
        if value:
            data[field] = value

    for name, field in _FILE_VARIABLES.items():
        value = os.getenv(f"{prefix}{name}")
        if value:
            data[field] = value
            continue
        path = os.getenv(f"{prefix}{name}_PATH")
        if path:
            data[field] = _read_file(path)

    logger.debug(f"从环境变量加载配置: {sorted(data)}")
    return AlipayConfig.model_validate(data)
