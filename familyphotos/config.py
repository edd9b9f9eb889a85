"""Family Photos Server Configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    # Server
    app_name: str = "Family Photos"
    host: str = "0.0.0.0"
    port: int = 3999
    debug: bool = False
    log_level: str = "INFO"

    # Paths
    uploads_dir: Path = Path.home() / "familyphotos" / "uploads"
    public_dir: Path = Path.home() / "familyphotos" / "public"

    # Upload limits
    max_file_size: int = 1 * 1024 * 1024 * 1024  # 1 GiB per file
    max_files: int = 250

    # Field limits
    name_max_length: int = 60
    caption_max_length: int = 300

    model_config = {"env_prefix": "FAMILYPHOTOS_"}

    @property
    def users_file(self) -> Path:
        return self.uploads_dir / "users.json"

    def ensure_dirs(self) -> None:
        """Create the upload and public directories and seed an empty user list."""
        for d in [self.uploads_dir, self.public_dir]:
            d.mkdir(parents=True, exist_ok=True)
        if not self.users_file.exists():
            self.users_file.write_text("[]")


settings = Settings()
settings.ensure_dirs()
