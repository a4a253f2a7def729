import logging
from pathlib import Path

from pydantic_settings import BaseSettings


# 配置和日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SQLITE_PREFIX = "sqlite:///"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Flight Search Service"
    API_V1_STR: str = "/api/v1"
    DATABASE_URL: str = "sqlite:///database/flights.sqlite"
    DEFAULT_ITINERARY_LIMIT: int = 10
    LOG_LEVEL: str = "INFO"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        logging.getLogger().setLevel(self.LOG_LEVEL.upper())
        # 记录配置加载情况
        logger.debug(f"项目名称: {self.PROJECT_NAME}")
        logger.debug(f"API版本: {self.API_V1_STR}")
        logger.debug(f"数据库URL: {self.DATABASE_URL}")
        logger.debug(f"默认行程数量: {self.DEFAULT_ITINERARY_LIMIT}")

    @property
    def database_path(self) -> Path:
        """Filesystem path of the sqlite database named by DATABASE_URL."""
        return Path(database_path_from_url(self.DATABASE_URL))

    class Config:
        env_file = ".env"


def database_path_from_url(url: str) -> str:
    if url.startswith(SQLITE_PREFIX):
        return url[len(SQLITE_PREFIX):]
    return url


def database_url_from_path(path) -> str:
    return f"{SQLITE_PREFIX}{path}"


settings = Settings()
