from __future__ import annotations
from typing import Optional


class ChbtcError(Exception):
    """Base class for every error raised by the CHBTC client."""


class TransportError(ChbtcError):
    """네트워크 실패, 2xx 외 응답, JSON 이 아닌 본문."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ParseError(ChbtcError):
    """응답에 필요한 필드가 없거나 숫자/시간으로 변환할 수 없음."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ExchangeError(ChbtcError):
    """거래소가 code/message 봉투로 실패를 알린 경우 (서명 오류, 권한 없음 등)."""

    def __init__(self, code: Optional[int], message: str):
        super().__init__(f"exchange error code={code}: {message}")
        self.code = code
        self.message = message
