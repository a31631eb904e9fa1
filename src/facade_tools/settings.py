"""Environment-based configuration via pydantic-settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Geometry tolerances and logging, configurable via FACADE_* env vars."""

    model_config = {"env_prefix": "FACADE_"}

    absolute_tolerance: float = 0.001
    planarity_tolerance: float = 0.001
    log_level: str = "INFO"
