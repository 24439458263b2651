from decimal import Decimal
from enum import Enum
from functools import lru_cache

from pydantic import PostgresDsn, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class Settings(BaseSettings):
    """Настройки проекта"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # region Настройки бота
    bot_token: str = Field(title="Токен бота", default="")
    payment_provider_token: str = Field(title="Токен платежного провайдера", default="")
    message_per_second: float = Field(title="Кол-во сообщений в секунду", default=1)
    log_level: LogLevel = Field(title="Уровень логирования", default=LogLevel.INFO)
    # endregion

    debug: bool = Field(title="Режим отладки", default=False)

    # region Настройки сбора
    currency: str = Field(title="Код валюты", default="RUB")
    min_donation_amount: int = Field(title="Минимальная сумма пожертвования", default=60)
    max_donation_amount: int = Field(title="Максимальная сумма пожертвования", default=100000)
    preset_donation_amounts: list[int] = Field(
        title="Суммы на кнопках", default=[100, 500, 1000, 5000]
    )
    max_goal_target_amount: Decimal = Field(
        title="Максимальная целевая сумма", default=Decimal("99999999")
    )
    max_goal_title_length: int = Field(title="Максимальная длина названия цели", default=255)
    donation_expire_seconds: int = Field(
        title="Время ожидания оплаты в секундах", default=900
    )
    # endregion

    # region Настройки БД
    postgres_user: str = Field(title="Пользователь БД", default="postgres")
    postgres_password: str = Field(title="Пароль БД", default="postgres")
    postgres_host: str = Field(title="Хост БД", default="localhost")
    postgres_port: int = Field(title="Порт ДБ", default=5432)
    postgres_db: str = Field(title="Название БД", default="donations")
    # endregion

    # region Настройки RabbitMQ
    rabbitmq_host: str = Field(title="Хост rabbitmq", default="guest:guest@rabbitmq")
    rabbitmq_port: int | str = Field(title="Порт rabbitmq", default=5672)
    # endregion

    # region Настройки Redis
    redis_host: str = Field(title="Хост redis", default="redis")
    redis_port: int | str = Field(title="Порт redis", default=6379)
    # endregion

    database_url: str | None = Field(title="Ссылка БД", default=None)

    @computed_field
    @property
    def postgres_url(self) -> str:
        if self.database_url:
            return self.database_url
        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg2",
                username=self.postgres_user,
                password=self.postgres_password,
                host=self.postgres_host,
                port=self.postgres_port,
                path=f"{self.postgres_db}",
            )
        )

    @computed_field
    @property
    def rabbitmq_url(self) -> str:
        return f"amqp://{self.rabbitmq_host}:{self.rabbitmq_port}/"

    @computed_field
    @property
    def redis_url(self) -> str:
        return f"redis://{self.redis_host}:{self.redis_port}"

    @computed_field
    @property
    def celery_broker_url(self) -> str:
        return self.rabbitmq_url

    @computed_field
    @property
    def celery_backend_url(self) -> str:
        return f"{self.redis_url}/0"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
