"""Configuration loading and models."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel

# Directory holding run.py; relative credential paths resolve against it.
APP_BASE_DIR = Path(__file__).resolve().parent.parent.parent


class GoogleSheetsConfig(BaseModel):
    spreadsheet_id: str = ""
    sheet_name: str = "Sheet1"
    credentials_file: str = "credentials.json"  # service-account key


class HubSpotConfig(BaseModel):
    token: str = ""
    base_url: str = "https://api.hubapi.com"


class SyncConfig(BaseModel):
    interval_seconds: float = 60.0


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000


class Settings(BaseModel):
    google_sheets: GoogleSheetsConfig = GoogleSheetsConfig()
    hubspot: HubSpotConfig = HubSpotConfig()
    sync: SyncConfig = SyncConfig()
    server: ServerConfig = ServerConfig()

    @property
    def credentials_path(self) -> Path:
        """Service-account key path, resolved against the app directory."""
        path = Path(self.google_sheets.credentials_file)
        if not path.is_absolute():
            path = APP_BASE_DIR / path
        return path


DEFAULT_CONFIG_PATH = Path("config")

# Env var -> (section, field). Env wins over YAML.
ENV_OVERRIDES = {
    "GOOGLE_SHEETS_SPREADSHEET_ID": ("google_sheets", "spreadsheet_id"),
    "GOOGLE_SHEETS_SHEET_NAME": ("google_sheets", "sheet_name"),
    "GOOGLE_CREDENTIALS_FILE": ("google_sheets", "credentials_file"),
    "HUBSPOT_TOKEN": ("hubspot", "token"),
}


def apply_env_overrides(settings: Settings) -> Settings:
    """Fill settings from environment variables where they are set."""
    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name, "")
        if value:
            setattr(getattr(settings, section), field, value)
    return settings


def load_settings(config_path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from YAML file, then apply environment overrides."""
    settings_file = config_path / "settings.yaml"

    if not settings_file.exists():
        return apply_env_overrides(Settings())

    with open(settings_file) as f:
        data = yaml.safe_load(f) or {}

    return apply_env_overrides(Settings(**data))
