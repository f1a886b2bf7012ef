"""
pyredux 設定模組。

透過環境變數控制診斷警告（開發模式與生產模式）。
使用 pydantic-settings 進行驗證與環境變數覆寫。
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReduxSettings(BaseSettings):
    """
    全域設定。

    環境變數:
        PYREDUX_ENV: "development"（預設）或 "production"
        PYREDUX_WARNINGS: 強制開啟或關閉診斷警告
    """

    env: Literal["development", "production"] = Field("development", description="執行環境")
    warnings: Optional[bool] = Field(None, description="強制開啟或關閉診斷警告")

    model_config = SettingsConfigDict(env_prefix="PYREDUX_")

    @property
    def warnings_enabled(self) -> bool:
        # 警告只影響診斷輸出，不會改變任何返回值或狀態轉換
        if self.warnings is not None:
            return self.warnings
        return self.env != "production"


@lru_cache(maxsize=1)
def get_settings() -> ReduxSettings:
    """讀取並快取設定；測試中可用 get_settings.cache_clear() 重新載入。"""
    return ReduxSettings()
