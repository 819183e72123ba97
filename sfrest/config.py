from pydantic_settings import BaseSettings, SettingsConfigDict

from sfrest.sdk.models import Credentials


class Settings(BaseSettings):
    client_id: str = ""
    client_secret: str = ""
    username: str = ""
    password: str = ""
    security_token: str = ""
    login_url: str = "https://login.salesforce.com"
    api_version: str = ""
    timeout: float = 30.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SALESFORCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def credentials(self) -> Credentials:
        return Credentials(
            client_id=self.client_id,
            client_secret=self.client_secret,
            username=self.username,
            password=self.password,
            security_token=self.security_token,
        )


settings = Settings()
