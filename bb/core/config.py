import json
from bb.common.logger import log
from bb.common.setup import PATHS
from bb.core.session import (
    PHASE_DURATION_DEFAULT,
    SESSION_LENGTH_DEFAULT,
    SessionConfig,
    is_valid_phase_duration,
    is_valid_session_length,
)
from bb.util.misc import now_iso


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.current / "settings.json"

# Default values for the settings section, along with the validator each one has to pass.
_SETTINGS_DEFAULTS = {
    "phase_duration_seconds": PHASE_DURATION_DEFAULT,
    "session_length_seconds": SESSION_LENGTH_DEFAULT,
}
_SETTINGS_VALIDATORS = {
    "phase_duration_seconds": is_valid_phase_duration,
    "session_length_seconds": is_valid_session_length,
}
# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "settings": dict(_SETTINGS_DEFAULTS),
    }

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings.json from PATHS.current, defaulting anything missing or out of range. A missing or unreadable file
# just means defaults.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            log.info("No existing settings.json found in `current`, loading default settings.")
            return build_default_settings()

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            data = json.load(f)
        defaulted_values = set()

        # Validate the meta dict
        if "meta" not in data or not isinstance(data["meta"], dict):
            defaulted_values.add("meta")
            data["meta"] = {}
        if "schema_version" not in data["meta"] or not isinstance(data["meta"]["schema_version"], int):
            defaulted_values.add("meta.schema_version")
            data["meta"]["schema_version"] = _SCHEMA_VERSION

        # Validate the settings dict, every key has to exist and pass its validator
        if "settings" not in data or not isinstance(data["settings"], dict):
            defaulted_values.add("settings")
            data["settings"] = dict(_SETTINGS_DEFAULTS)
        else:
            for key, default in _SETTINGS_DEFAULTS.items():
                if key not in data["settings"] or not _SETTINGS_VALIDATORS[key](data["settings"][key]):
                    defaulted_values.add(f"settings.{key}")
                    data["settings"][key] = default

        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return data
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.",exc_info=True)
        return build_default_settings()

# Write the given settings dict to PATHS.current / settings.json
def save_settings(data):
    data["meta"]["saved_at"] = now_iso()
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===

#region === SessionConfig Conversion ===

def load_config():
    settings = load_settings()["settings"]
    return SessionConfig(
        phase_duration_seconds=settings["phase_duration_seconds"],
        session_length_seconds=settings["session_length_seconds"],
    )

def save_config(config):
    data = build_default_settings()
    data["settings"]["phase_duration_seconds"] = config.phase_duration_seconds
    data["settings"]["session_length_seconds"] = config.session_length_seconds
    save_settings(data)

#endregion === SessionConfig Conversion ===
