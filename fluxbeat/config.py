"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # Audio
    sample_rate: int = 44100

    # Analysis
    frame_size: int = 2048
    hop_size: int = 512
    sensitivity: float = 0.5
    min_time_gap: float = 0.08  # seconds

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    max_samples: int = 44100 * 600  # 10 minutes at 44.1 kHz

    model_config = {"env_prefix": "FLUXBEAT_"}


settings = Settings()
