# swiftemplate/config/loader.py
"""
Handles loading and merging of configuration from TOML files, and layering
it with command-line options into a GeneratorConfig.
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import fields as dataclass_fields, MISSING
import structlog

from swiftemplate.exceptions import ConfigError

from .settings import GeneratorConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".swiftemplate.toml", "swiftemplate.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "swiftemplate"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_GENERATORCONFIG_ATTR_MAP: Dict[str, str] = {
    "output_file": "output_file",
    "html_quote": "html_quote_expressions",
    "html_quote_expressions": "html_quote_expressions",
    "emit_runtime": "emit_runtime",
    "console_show_summary": "console_show_summary",
}

BOOLEAN_ATTRS = {"html_quote_expressions", "emit_runtime", "console_show_summary"}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("swiftemplate", {})
    return data

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    project_dir = project_dir or Path.cwd()
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = project_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
            user_profiles.update(project_profiles)
            merged_toml_data["profiles"] = user_profiles
        elif isinstance(project_profiles, dict):
            merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def _apply_toml_values(effective_options: Dict[str, Any], toml_values: Dict[str, Any]):
    for toml_key, value in toml_values.items():
        attr = CONFIG_KEY_TO_GENERATORCONFIG_ATTR_MAP.get(toml_key)
        if attr is None:
            if toml_key != "profiles": log.debug("ignoring_unknown_config_key", key=toml_key)
            continue
        if attr in BOOLEAN_ATTRS and not isinstance(value, bool):
            raise ConfigError(f"Config key '{toml_key}' must be true or false, got {value!r}")
        if attr == "output_file":
            value = Path(value) if value else None
        effective_options[attr] = value

def build_generator_config(
    toml_data: Dict[str, Any],
    cli_overrides: Dict[str, Any],
    profile_name: Optional[str] = None,
) -> GeneratorConfig:
    """
    Layers dataclass defaults < config file values < active profile < explicit
    command-line values, and returns the resulting GeneratorConfig.
    """
    effective_options: Dict[str, Any] = {}
    for fd in dataclass_fields(GeneratorConfig):
        effective_options[fd.name] = fd.default_factory() if fd.default_factory is not MISSING else fd.default

    _apply_toml_values(effective_options, toml_data)

    if profile_name:
        profiles = toml_data.get("profiles", {})
        if not isinstance(profiles, dict) or profile_name not in profiles:
            raise ConfigError(f"Profile '{profile_name}' not found in configuration files")
        profile_values = profiles[profile_name]
        if not isinstance(profile_values, dict):
            raise ConfigError(f"Profile '{profile_name}' must be a table, got {profile_values!r}")
        log.info("applying_profile_settings", profile=profile_name)
        _apply_toml_values(effective_options, profile_values)
        effective_options["active_config_profile_name"] = profile_name

    valid_fields = {f.name for f in dataclass_fields(GeneratorConfig)}
    for attr, value in cli_overrides.items():
        if attr in valid_fields:
            effective_options[attr] = value

    config = GeneratorConfig(**effective_options)
    log.debug("generator_config_built", html_quote=config.html_quote_expressions,
              emit_runtime=config.emit_runtime, inputs=len(config.input_paths))
    return config
