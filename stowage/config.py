"""Application configuration from environment variables."""

import os
from os.path import dirname, abspath, join
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from functools import lru_cache
from dotenv import load_dotenv

from stowage import __version__

# .env lives in the project root, one level above the package
base_dir = dirname(dirname(abspath(__file__)))
env_file_path = join(base_dir, ".env")

if os.path.exists(env_file_path):
    load_dotenv(env_file_path)


class Settings(BaseSettings):
    """Settings shared by the status server and the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="STOWAGE_",
        env_file=env_file_path,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Server
    app_name: str = "Stowage"
    server_version: str = __version__
    server_url: str = "http://localhost:8085"
    status_timeout_seconds: float = 5.0

    # Deployment that carries the plugin init containers
    namespace: str = "stowage"
    deployment_name: str = "stowage"
    adapter_mode: str = "live"  # live, mock

    # Kubernetes API
    kube_api_url: str = "https://kubernetes.default.svc"
    kube_token: str | None = None
    kube_token_file: str = "/var/run/secrets/kubernetes.io/serviceaccount/token"
    kube_ca_file: str | None = None
    kube_verify_ssl: bool = True
    kube_timeout_seconds: float = 10.0

    # Plugins
    plugins_dir: str = "/plugins"
    plugins_volume_name: str = "plugins"
    plugins_mount_path: str = "/target"
    image_pull_policy: str = "IfNotPresent"

    # Logging
    log_level: str = "INFO"
    syslog_host: str | None = None
    syslog_port: int = 514

    # OpenTelemetry (optional)
    otel_endpoint: str | None = None
    otel_service_name: str = "stowage-server"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    s = Settings()

    if not s.kube_token:
        token_file = Path(s.kube_token_file)
        if token_file.exists():
            s.kube_token = token_file.read_text().strip()

    # Docker secrets
    if not s.kube_token:
        secret_file = Path("/run/secrets") / "kube_token"
        if secret_file.exists():
            s.kube_token = secret_file.read_text().strip()

    return s
