from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Inventory Console API"
    debug: bool = False

    product_page_size: int = 10
    audit_page_size: int = 15
    low_stock_threshold: int = 10
    notification_duration_seconds: float = 5.0

    preferences_path: str = "data/preferences.json"
    prefers_dark_mode: bool = False

    seed_mock_data: bool = True
    default_category: str = "Uncategorized"
    placeholder_image_url: str = "https://picsum.photos/seed/{seed}/400/400"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
