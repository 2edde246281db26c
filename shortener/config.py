from pydantic_settings import BaseSettings

from shortener.utils.codes import DEFAULT_CHARSET, DEFAULT_LENGTH


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str
    # 連線池取得連線、以及單一SQL語句的最長等待秒數，超過即視為store無法使用
    DATABASE_TIMEOUT_SECONDS: float = 5.0

    # Short code settings
    SHORT_CODE_LENGTH: int = DEFAULT_LENGTH
    SHORT_CODE_CHARSET: str = DEFAULT_CHARSET
    SHORT_CODE_MAX_ATTEMPTS: int = 3  # regenerate on short_url unique violation

    # CORS settings
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None  # combined log, all levels >= LOG_LEVEL
    LOG_ERROR_FILE: str | None = None  # errors only
    LOG_DEDUP_ENABLED: bool = True
    LOG_DEDUP_WINDOW_SECONDS: int = 60
    LOG_DEDUP_MAX_ENTRIES: int = 1000

    # Pydantic Settings的配置設定，用來控制類別如何讀取環境變數
    # "env_file": ".env"：告訴 Pydantic 要從.env檔案讀取環境變數
    # "extra": "ignore"：.env裡有但Settings沒定義的欄位直接忽略
    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
