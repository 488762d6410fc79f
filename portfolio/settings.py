import copy
import logging
import os

import yaml

from portfolio.constants import CONFIG_DIR, CONFIG_FILE, DEFAULT_SETTINGS, DeployMode, StorageBackend

# Retrieve main logger
logger = logging.getLogger("main")

# Cache variable, keyed by config file path
_cached_settings = {}

SERVERLESS_UPLOAD_PATH = "/tmp/uploads"


def _deep_merge(base, override):
    merged = copy.deepcopy(base)
    for section, values in (override or {}).items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section] = _deep_merge(merged[section], values)
        else:
            merged[section] = values
    return merged


def apply_env_overrides(settings, environ=None):
    """Environment variables win over the YAML file."""
    env = os.environ if environ is None else environ

    if env.get("DATABASE_URL"):
        settings["database"]["url"] = env["DATABASE_URL"]
    if env.get("SKIP_DATABASE", "").lower() in ("1", "true", "yes"):
        settings["database"]["skip"] = True

    if env.get("DEPLOY_MODE"):
        settings["server"]["deploy_mode"] = env["DEPLOY_MODE"].lower()
    elif env.get("GIN_MODE") == "release" or env.get("VERCEL"):
        settings["server"]["deploy_mode"] = DeployMode.SERVERLESS.value
    if env.get("HOST"):
        settings["server"]["host"] = env["HOST"]
    if env.get("PORT"):
        try:
            settings["server"]["port"] = int(env["PORT"])
        except ValueError:
            logger.warning(f"Ignoring non-numeric PORT '{env['PORT']}', using {settings['server']['port']}")
    if env.get("CORS_ALLOWED_ORIGINS"):
        settings["server"]["cors_allowed_origins"] = [
            origin.strip() for origin in env["CORS_ALLOWED_ORIGINS"].split(",") if origin.strip()
        ]

    uploads = settings["uploads"]
    remote = uploads["remote"]
    if env.get("UPLOAD_PROVIDER"):
        uploads["provider"] = env["UPLOAD_PROVIDER"].lower()
    if env.get("UPLOAD_PATH"):
        uploads["path"] = env["UPLOAD_PATH"]
    elif settings["server"]["deploy_mode"] == DeployMode.SERVERLESS.value:
        uploads["path"] = SERVERLESS_UPLOAD_PATH
    if env.get("SUPABASE_URL"):
        remote["url"] = env["SUPABASE_URL"].rstrip("/")
    api_key = env.get("SUPABASE_SERVICE_ROLE_KEY") or env.get("SUPABASE_ANON_KEY")
    if api_key:
        remote["api_key"] = api_key
    if env.get("SUPABASE_STORAGE_BUCKET"):
        remote["bucket"] = env["SUPABASE_STORAGE_BUCKET"]

    if env.get("LOG_FORMAT"):
        settings["logging"]["format"] = env["LOG_FORMAT"].lower()
    if env.get("LOG_LEVEL"):
        settings["logging"]["level"] = env["LOG_LEVEL"].upper()

    return settings


def load_settings(force=False, config_file=CONFIG_FILE):
    cache_key = os.path.abspath(config_file)
    if cache_key in _cached_settings and not force:
        return _cached_settings[cache_key]

    if os.path.exists(config_file):
        logger.debug(f"Reading configuration file: {config_file}")
        with open(config_file, "r") as yaml_file:
            file_settings = yaml.safe_load(yaml_file) or {}
        settings = _deep_merge(DEFAULT_SETTINGS, file_settings)
    else:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        try:
            os.makedirs(os.path.dirname(config_file) or CONFIG_DIR, exist_ok=True)
            with open(config_file, "w") as yaml_file:
                yaml.dump(settings, yaml_file)
        except OSError as e:
            # Read-only filesystems (serverless) keep the in-memory defaults
            logger.warning(f"Could not write default configuration to {config_file}: {e}")

    settings = apply_env_overrides(settings)
    _cached_settings[cache_key] = settings
    return settings


def reload_conf(config_file=CONFIG_FILE):
    return load_settings(force=True, config_file=config_file)


def get_deploy_mode(settings):
    try:
        return DeployMode(settings["server"]["deploy_mode"])
    except ValueError:
        logger.warning(f"Unknown deploy mode '{settings['server']['deploy_mode']}', using standalone")
        return DeployMode.STANDALONE


def resolve_storage_backend(settings):
    """Pick the upload backend once, from the merged settings."""
    uploads = settings["uploads"]
    remote = uploads["remote"]
    provider = (uploads.get("provider") or "").lower()
    wants_remote = provider in ("remote", "supabase")
    if not provider and get_deploy_mode(settings) == DeployMode.SERVERLESS:
        wants_remote = True

    if wants_remote:
        if remote.get("url") and remote.get("api_key"):
            return StorageBackend.REMOTE
        logger.warning("Remote upload provider requested but URL or API key missing, falling back to local storage")
    return StorageBackend.LOCAL
