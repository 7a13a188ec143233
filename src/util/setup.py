import copy
import os
import yaml
from typing import Any, Dict, Optional
from cerberus import Validator
from dotenv import load_dotenv
from src.util.constants import DEFAULT_CONFIG_PATH
from src.util.logger import log

load_dotenv()
settings = {}

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config", "settings-schema.yml")

def get_settings() -> Dict[str, Any]:
    global settings
    if settings == {}:
        load_settings()
    return settings

def load_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load, validate and default the YAML configuration.

    The path comes from the argument, then the GENET_CONFIG environment
    variable, then the packaged default location. A missing or invalid file
    is not fatal: the built-in defaults are used instead.
    """
    if config_path is None:
        config_path = os.getenv("GENET_CONFIG") or DEFAULT_CONFIG_PATH

    loaded_yaml = {}
    if not os.path.exists(config_path):
        log(f'Config file not found: {config_path}, using defaults', "WARNING")
    else:
        try:
            with open(config_path, 'r') as yaml_file:
                loaded_yaml = yaml.safe_load(yaml_file) or {}
        except yaml.YAMLError as e:
            log(f'Failed to parse config file {config_path}: {e}, using defaults', "WARNING")
            loaded_yaml = {}

    global settings
    settings = validate_settings(loaded_yaml)
    return settings

class SettingsValidator(Validator):
    def _normalize_coerce_clock_time(self, value):
        # Unquoted 22:30 is a YAML 1.1 base-60 integer (1350)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return f"{value // 60:02d}:{value % 60:02d}"
        return value

def validate_settings(document: Dict[str, Any]) -> Dict[str, Any]:
    """Normalise a settings document against the schema.

    Missing keys are filled with their defaults. Keys that do not validate
    are dropped so they fall back to their defaults; the rest of the document
    is kept.
    """
    if not isinstance(document, dict):
        log(f'Config document must be a mapping, got {type(document).__name__}, using defaults', "WARNING")
        return default_settings()

    document = copy.deepcopy(document)
    v = SettingsValidator(load_schema(), allow_unknown=True)
    while not v.validate(document):
        log(f'Invalid config values: {v.errors}, using defaults for them', "WARNING")
        if not drop_invalid_fields(document, v.errors):
            return default_settings()
    return v.document

def drop_invalid_fields(document: Dict[str, Any], errors: Dict[str, Any]) -> bool:
    """Remove the keys named in a Cerberus error tree. Returns True if any were removed."""
    dropped = False
    for field, field_errors in errors.items():
        if field not in document:
            continue
        for error in field_errors:
            if isinstance(error, dict) and isinstance(document[field], dict):
                dropped = drop_invalid_fields(document[field], error) or dropped
            else:
                del document[field]
                dropped = True
                break
    return dropped

def default_settings() -> Dict[str, Any]:
    v = SettingsValidator(load_schema())
    return v.normalized({})

def load_schema() -> Dict[str, Any]:
    with open(SCHEMA_PATH, 'r') as schema_file:
        return yaml.safe_load(schema_file)

def reset_settings():
    global settings
    settings = {}
