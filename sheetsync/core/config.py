"""Library configuration loaded from environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Paths (relative to project root)
    schemas_dir: str = "schemas"

    # Decoding
    validate_options: bool = False
    require_title_column: bool = True

    @property
    def project_root(self) -> Path:
        return Path(__file__).parent.parent.parent

    model_config = {"env_file": ".env", "env_prefix": "SHEETSYNC_", "extra": "ignore"}


settings = Settings()
