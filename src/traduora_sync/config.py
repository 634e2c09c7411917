from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Traduora
    traduora_host: str = "localhost:8080"
    traduora_insecure: bool = False
    traduora_user: str
    traduora_password: str
    traduora_project_id: str
    traduora_locale: str = "en"

    # Local translation file
    translation_file: str = "en.json"

    # Baseline (unset revision skips three-way refinement)
    baseline_repo: str = "."
    baseline_revision: str | None = None

    # Review server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    @property
    def traduora_base_url(self) -> str:
        scheme = "http" if self.traduora_insecure else "https"
        return f"{scheme}://{self.traduora_host}"
