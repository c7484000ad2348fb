import os
import pandas as pd
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# The workbook lives under <project root>/data/parameters_config.
# This file is <project root>/src/eco_route/config.py, so the root is two levels up.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "data", "parameters_config", "eco_parameters.xlsx")

# Environment override for deployments that keep the workbook elsewhere
CONFIG_PATH_ENV = "ECO_ROUTE_PARAMETERS"


def resolve_config_path(path: Optional[str] = None) -> str:
    """
    Pick the parameter workbook: explicit path, then $ECO_ROUTE_PARAMETERS,
    then the project default.
    """
    if path:
        return path
    return os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH


def load_excel_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load tunable parameters from an Excel workbook.
    Expected columns: Key, Value (Section, Unit, Description are ignored).
    Returns a dictionary of Key -> Value. Never raises; an unusable
    workbook yields an empty dict so callers fall back to defaults.
    """
    path = resolve_config_path(path)
    config: Dict[str, Any] = {}
    if not os.path.exists(path):
        logger.info(f"Parameter workbook not found at {path}. Using defaults.")
        return config

    try:
        df = pd.read_excel(path)
        if "Key" in df.columns and "Value" in df.columns:
            for _, row in df.iterrows():
                if pd.isna(row["Key"]) or pd.isna(row["Value"]):
                    continue
                key = str(row["Key"]).strip()
                config[key] = row["Value"]
            logger.info(f"Loaded {len(config)} parameters from {path}")
        else:
            logger.warning(f"Excel file {path} missing 'Key' or 'Value' columns.")
    except Exception as e:
        logger.error(f"Failed to load config from {path}: {e}")

    return config


def coerce_param(config: Dict[str, Any], key: str, default: Any) -> Any:
    """
    Fetch `key` from a loaded config, converted to the type of `default`.
    Missing keys and values that do not convert keep the default.
    """
    if key not in config:
        return default
    raw = config[key]
    try:
        if isinstance(default, bool):
            if isinstance(raw, str):
                return raw.strip().lower() in ("1", "true", "yes", "y")
            return bool(raw)
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
        return str(raw).strip()
    except (TypeError, ValueError):
        logger.warning(f"Parameter '{key}' has unusable value {raw!r}; keeping default {default!r}")
        return default
