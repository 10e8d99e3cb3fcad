from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of plantflow directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Simulation service
    SIMULATION_SERVICE_URL: str = "http://localhost:8080/simulate"
    SIMULATION_TIMEOUT_SECONDS: float = 120.0
    DEFAULT_SIMULATION_UNTIL: int = 1000

    # Analysis proxy
    ANALYSIS_SERVICE_URL: str = "http://localhost:3000/api/ai-analysis"
    ANALYSIS_TIMEOUT_SECONDS: float = 120.0

    # Storage settings for the results side channel
    STORAGE_TYPE: str = "filesystem"  # "filesystem" or "s3"
    RESULTS_STORAGE_DIR: str = str(REPO_ROOT / "storage" / "results")

    # S3 settings (only used if STORAGE_TYPE = "s3")
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    S3_BUCKET: str = "plantflow-results"

    class Config:
        env_file = ".env"

settings = Settings()
