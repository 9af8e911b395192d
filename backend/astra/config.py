from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://postgres@localhost:5432/astra"
    app_env: str = "development"
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"
    log_dir: str = "logs"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def sql_echo(self) -> bool:
        """Echo SQL only while developing with debug logging on."""
        return self.app_env == "development" and self.debug


settings = Settings()
