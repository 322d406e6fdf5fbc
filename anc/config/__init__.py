"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

# Valid configuration values
VALID_PROVIDERS = {"openai", "claude"}
VALID_MODES = {"interactive", "all", "by-file"}

# Environment variable that overrides the stored credential, per provider
API_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

DEFAULT_SYSTEM_PROMPT_ALL = "You are a helpful AI that writes clear and concise Git commit messages based on diffs."
DEFAULT_SYSTEM_PROMPT_FILE = "You are a helpful AI that writes concise Git commit messages per file."


@dataclass
class Config:
    """User configuration with sensible defaults."""
    api_key: str = ""
    provider: str = "openai"
    model: str = "o4-mini"
    default_mode: str = "interactive"  # "interactive", "all" or "by-file"
    auto_stage_all: bool = False  # Preselect every changed file
    temperature: float = 1.0
    system_prompt_all: str = DEFAULT_SYSTEM_PROMPT_ALL
    system_prompt_file: str = DEFAULT_SYSTEM_PROMPT_FILE

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults silently after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if self.default_mode not in VALID_MODES:
            warnings.append(f"Invalid default_mode '{self.default_mode}', using '{defaults.default_mode}'")
            self.default_mode = defaults.default_mode

        if isinstance(self.temperature, bool) or not isinstance(self.temperature, (int, float)):
            warnings.append(f"Invalid temperature '{self.temperature}', using {defaults.temperature}")
            self.temperature = defaults.temperature
        else:
            self.temperature = float(self.temperature)

        if not isinstance(self.auto_stage_all, bool):
            warnings.append(f"Invalid auto_stage_all '{self.auto_stage_all}', using {str(defaults.auto_stage_all).lower()}")
            self.auto_stage_all = defaults.auto_stage_all

        if not self.model:
            self.model = defaults.model

        return warnings

    @property
    def api_key_env(self) -> str:
        return API_KEY_ENV.get(self.provider, API_KEY_ENV["openai"])

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys and v is not None}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def default_config_path() -> Path:
    return Path.home() / ".config" / "anc" / "config.json"


class ConfigManager:
    """Manages loading and saving configuration."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or default_config_path()

    def load(self, apply_env: bool = True) -> Config:
        """Load the stored config, then apply the environment credential.

        A missing or unreadable file falls back to defaults. Pass
        apply_env=False to get exactly what is stored, e.g. before saving.
        """
        config = self._load_from_file(self.path) if self.path.exists() else Config()
        env_key = os.environ.get(config.api_key_env) if apply_env else None
        if env_key:
            config.api_key = env_key
        return config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, TypeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        os.chmod(self.path, 0o600)
        return self.path

    def exists(self) -> bool:
        return self.path.exists()


__all__ = [
    "Config",
    "ConfigManager",
    "default_config_path",
    "VALID_PROVIDERS",
    "VALID_MODES",
    "API_KEY_ENV",
    "DEFAULT_SYSTEM_PROMPT_ALL",
    "DEFAULT_SYSTEM_PROMPT_FILE",
]
