import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator, ValidationError

DEFAULT_BASE_URL = "https://api.etherscan.io/v2/api"


class ConfigError(RuntimeError):
    pass


class Providers(BaseModel):
    class Etherscan(BaseModel):
        base_url: str = DEFAULT_BASE_URL
        chain_id: int = 1
        timeout: float = 15
        api_key: Optional[str] = None

        @field_validator("base_url")
        @classmethod
        def must_be_https(cls, v: str) -> str:
            # unresolved placeholder falls back to the public endpoint
            if "${" in v:
                return DEFAULT_BASE_URL
            if not v.startswith("https://"):
                raise ValueError("Etherscan base URL must be HTTPS")
            return v

        @field_validator("api_key", mode="before")
        @classmethod
        def blank_key_is_unset(cls, v):
            if v is None:
                return None
            v = str(v).strip()
            if not v or "${" in v:
                return None
            return v

        @field_validator("timeout")
        @classmethod
        def positive_timeout(cls, v: float) -> float:
            if v <= 0:
                raise ValueError("timeout must be positive")
            return v

    etherscan: Etherscan = Etherscan()


class Export(BaseModel):
    output_dir: str = "."
    filename_template: str = "{address}_transactions.csv"


class Settings(BaseModel):
    network: str = "ethereum"
    providers: Providers = Providers()
    export: Export = Export()


def load_settings(path: str = "config.yaml") -> Settings:
    """
    Build settings from an optional YAML file plus environment overrides.
    A missing file yields the defaults; the API key is expected from
    $ETHERSCAN_API_KEY.
    """
    import yaml

    cfg = {}
    if Path(path).exists():
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise RuntimeError(f"Configuration error in {path}: top level must be a mapping")

    providers = cfg["providers"] = cfg.get("providers") or {}
    etherscan = providers["etherscan"] = providers.get("etherscan") or {}
    env_key = os.environ.get("ETHERSCAN_API_KEY")
    if env_key:
        etherscan["api_key"] = env_key
    env_url = os.environ.get("ETHERSCAN_BASE_URL")
    if env_url:
        etherscan["base_url"] = env_url

    try:
        return Settings.model_validate(cfg)
    except ValidationError as e:
        raise RuntimeError(f"Configuration error in {path}: {e}") from e
