"""Configuration loading and validation."""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.error_handling import handle_filesystem_errors, log_and_reraise

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("i18n-accessor.yaml")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AccessorConfig(BaseModel):
    """Where translations live and how the CLI reports."""
    translations_dir: Path = Path("locales")
    locale: str = "en"
    log_level: str = "INFO"

    @field_validator('locale')
    @classmethod
    def validate_locale(cls, v: str) -> str:
        # en, en-US, pt_BR, zh-Hant-TW
        if not re.match(r'^[A-Za-z]{2,8}([-_][A-Za-z0-9]{1,8})*$', v):
            raise ValueError(f"locale must look like 'en' or 'en-US', got '{v}'")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got '{v}'")
        return level

    def locale_path(self) -> Path:
        """Default translation file for the configured locale."""
        return self.translations_dir / f"{self.locale}.yml"


class AccessorSettings(BaseSettings):
    """Environment overrides (I18N_ACCESSOR_LOCALE, ...)."""
    model_config = SettingsConfigDict(env_prefix="I18N_ACCESSOR_")

    translations_dir: Optional[Path] = None
    locale: Optional[str] = None
    log_level: Optional[str] = None

    def overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


_config_cache: Dict[str, tuple] = {}


def _get_cached_or_load(resolved_path: Path, loader):
    """Return cached config if file mtime unchanged, else reload."""
    key = str(resolved_path)
    try:
        current_mtime = resolved_path.stat().st_mtime
    except FileNotFoundError:
        _config_cache.pop(key, None)
        return None

    cached = _config_cache.get(key)
    if cached is not None:
        cached_result, cached_mtime = cached
        if cached_mtime == current_mtime:
            return cached_result

    result = loader(resolved_path)
    _config_cache[key] = (result, current_mtime)
    return result


@handle_filesystem_errors("load config")
def _load_config_data(config_path: Path) -> Dict[str, Any]:
    """Internal loader for raw config data (no caching)."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return _expand_env_vars(data)


def clear_config_cache() -> None:
    """Clear the module-level config cache. Useful for tests."""
    _config_cache.clear()


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> AccessorConfig:
    """Load accessor configuration from YAML, then apply environment overrides.

    Uses mtime-based caching for the file contents. A missing file means
    defaults (plus environment overrides).
    """
    config_path = Path(config_path)
    data: Dict[str, Any] = {}
    if config_path.exists():
        data = dict(_get_cached_or_load(config_path.resolve(), _load_config_data) or {})
    else:
        logger.warning(
            f"Config file not found: {config_path}. Using default configuration."
        )

    data.update(AccessorSettings().overrides())
    try:
        return AccessorConfig(**data)
    except ValidationError as e:
        log_and_reraise(e, f"Invalid configuration in {config_path}", logger_instance=logger)


def _expand_env_vars(data: Any, _path: str = "") -> Any:
    """Recursively expand ${VAR} values in config data.

    Args:
        data: Config data to process
        _path: Internal tracking for error messages (e.g., "locale")
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v, f"{_path}.{k}" if _path else k) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item, f"{_path}[{i}]") for i, item in enumerate(data)]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var = data[2:-1]
        value = os.environ.get(env_var)
        if value is None:
            logger.warning(
                f"Environment variable '{env_var}' not set (referenced at config path: {_path or 'root'}). "
                f"The literal string '{data}' will be used."
            )
            return data
        return value
    return data
