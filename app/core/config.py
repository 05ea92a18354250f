from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    db_path: str = Field(default="./data/cms.db", alias="DB_PATH")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=1337, alias="PORT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    popular_default_limit: int = Field(default=10, alias="POPULAR_DEFAULT_LIMIT")
    popular_max_limit: int = Field(default=100, alias="POPULAR_MAX_LIMIT")
    # Single UPDATE ... RETURNING instead of read-modify-write
    atomic_view_increment: bool = Field(default=False, alias="ATOMIC_VIEW_INCREMENT")

    default_page_size: int = Field(default=25, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")

    cms_base_url: str = Field(default="http://localhost:1337", alias="CMS_BASE_URL")
    request_timeout_seconds: int = Field(default=20, alias="REQUEST_TIMEOUT_SECONDS")
    user_agent: str = Field(default="ArticleClient/1.0", alias="USER_AGENT")

settings = Settings()
