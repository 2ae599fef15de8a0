from pathlib import Path
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]
ENV_PATH = BASE_DIR / ".env"

# placeholder for secrets that must come from the environment
UNSET_SECRET = "IN_ENV"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # App
    env: str = "dev"
    service_name: str = "maison-api"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Storage locations
    data_dir: Path = BASE_DIR / "data"
    upload_dir: Path = BASE_DIR / "uploads"
    log_dir: Path = BASE_DIR / "logs"

    # Security
    admin_password: SecretStr = SecretStr(UNSET_SECRET)

    # Payments: number the mobile-money transfers are sent to
    payment_phone: str = "+243831401205"

    # Uploads
    max_images: int = 5
    max_image_size: int = 5 * 1024 * 1024

    # Audit: propagate audit log failures instead of swallowing them
    audit_strict: bool = False

    # Telemetry (tracing is off when unset)
    otlp_endpoint: str | None = None

    @property
    def audit_log_path(self) -> Path:
        return self.log_dir / "admin-actions.log"


settings = Settings()
