"""Central configuration using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # MQTT
    mqtt_enabled: bool = Field(default=False, alias="MQTT_ENABLED")
    mqtt_host: str = Field(default="localhost", alias="MQTT_HOST")
    mqtt_port: int = Field(default=1883, alias="MQTT_PORT")

    # Application
    app_name: str = "Sim Door Lock"
    debug: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8888

    # Actions
    action_history_limit: int = 100

    # Lock config
    lock_config_path: str = str(
        Path(__file__).parent / "lock.yaml"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()
