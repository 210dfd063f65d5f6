from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        env_prefix="GRAPHWALK_",
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Playback pacing (same delay between every step)
    STEP_DELAY_MS: int = 450

    # Rendering collaborator
    CANVAS_CONTAINER: str = "cy"
    LAYOUT_NAME: str = "cose"
    LAYOUT_SEED: int = 7
    LAYOUT_ITERATIONS: int = 50
    SUBSCRIBER_QUEUE_SIZE: int = 256

    @property
    def step_delay_seconds(self) -> float:
        return self.STEP_DELAY_MS / 1000


settings = Settings()
