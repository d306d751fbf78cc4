# tasktracker/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # app
    app_env: str = Field("local", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_sql: bool = Field(False, alias="LOG_SQL")
    cors_allow_origins: str = Field(
        "http://localhost:3000,http://localhost:8000", alias="CORS_ALLOW_ORIGINS"
    )

    # DB (DATABASE_URL / DB_SSLMODE / DATABASE_DRIVER are read by db.session)
    db_auto_create: bool = Field(False, alias="DB_AUTO_CREATE")

    # client
    api_url: str = Field("http://localhost:8000", alias="TASKTRACKER_API_URL")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
