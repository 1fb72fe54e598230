from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
from typing import List, Optional


class RankingPolicy(BaseModel):
    """Numeric knobs shared by the query service and the ranking engine."""

    # Requested radii below this are raised to it
    min_radius_km: float = Field(default=150.0, gt=0)
    # Requested radii at or above the floor are scaled by this
    radius_multiplier: float = Field(default=1.5, gt=0)
    # Some countries have a lot of airports without IATA codes
    max_candidates: int = Field(default=500, ge=1)
    max_results: int = Field(default=20, ge=1)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # App
    app_name: str = Field(default="Location Code Service")
    env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    shutdown_grace_seconds: float = Field(default=5.0)

    # Reference data (OurAirports)
    data_dir: str = Field(default="./data")
    data_base_url: str = Field(default="https://davidmegginson.github.io/ourairports-data/")
    download_timeout_seconds: float = Field(default=60.0)
    airport_types: List[str] = Field(
        default=["large_airport", "medium_airport", "small_airport"]
    )

    # Remote client: host:port or URL of a running service
    locationcode_service: Optional[str] = None
    client_connect_timeout_seconds: float = Field(default=5.0)
    client_timeout_seconds: float = Field(default=10.0)

    policy: RankingPolicy = Field(default_factory=RankingPolicy)


settings = Settings()
