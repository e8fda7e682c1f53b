from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Core
    ENVIRONMENT: str = Field(default="production")
    LOG_LEVEL: str = Field(default="INFO")

    # Baidu Cloud SMS (BCE)
    BAIDU_SMS_AK: str = Field(default="")
    BAIDU_SMS_SK: str = Field(default="")
    BAIDU_SMS_INVOKE_ID: str = Field(default="")  # signatureId on the wire
    BAIDU_SMS_DOMAIN: str = Field(default="")  # empty -> smsv3.bj.baidubce.com

    # Transport
    SMS_HTTP_TIMEOUT: float = Field(default=5.0)


settings = Settings()
