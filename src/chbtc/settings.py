# src/chbtc/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
import os
import yaml

from chbtc.exchanges.chbtc import ChbtcCreds, MARKET_API, TRADE_API


class ApiCfg(BaseModel):
    key: str | None = None
    secret: str | None = None


class ExchangeCfg(BaseModel):
    market_url: str = MARKET_API
    trade_url: str = TRADE_API
    # None 이면 타임아웃 없이 블로킹
    timeout_s: float | None = 10


class DataCfg(BaseModel):
    interval: str = "1min"
    size: int = Field(default=100, ge=0, le=1000)


class Settings(BaseSettings):
    env: str = "dev"
    api: ApiCfg = ApiCfg()
    exchange: ExchangeCfg = ExchangeCfg()
    data: DataCfg = DataCfg()

    # 모르는 키는 무시, .env 자동 로드, CHBTC_API__KEY 같은 중첩 키 지원
    model_config = SettingsConfigDict(
        env_prefix="CHBTC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, path: str | None = None):
        cfg: dict = {}
        if path:
            with open(path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}

        # 환경변수 → YAML 값 덮어쓰기
        ek = os.getenv("CHBTC_ACCESS_KEY")
        es = os.getenv("CHBTC_SECRET_KEY")
        if ek or es:
            cfg.setdefault("api", {})
            if ek:
                cfg["api"]["key"] = ek
            if es:
                cfg["api"]["secret"] = es

        return cls.model_validate(cfg)

    def creds(self) -> ChbtcCreds | None:
        if self.api.key and self.api.secret:
            return ChbtcCreds(access_key=self.api.key, secret_key=self.api.secret)
        return None
