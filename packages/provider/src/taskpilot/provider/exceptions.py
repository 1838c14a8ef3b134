"""Provider 异常体系"""


class ProviderError(Exception):
    """Provider 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过重试恢复（本系统不做重试，仅供日志参考）
        """
        super().__init__(message)
        self.recoverable = recoverable


class ProviderUnreachableError(ProviderError):
    """模型服务不可达（连接失败、超时、DNS 解析失败等）"""

    def __init__(self, endpoint: str, original_error: Exception) -> None:
        """
        Args:
            endpoint: 尝试连接的模型服务地址
            original_error: 原始异常
        """
        super().__init__(
            f"LLM endpoint unreachable: {endpoint} -- {original_error}",
            recoverable=True,
        )
        self.endpoint = endpoint
        self.original_error = original_error


class MalformedResponseError(ProviderError):
    """模型返回的内容无法按约定格式解析"""

    def __init__(self, message: str, raw_content: str = "") -> None:
        super().__init__(message, recoverable=False)
        self.raw_content = raw_content
