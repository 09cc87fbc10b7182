import yaml

from pathlib import Path
from typing import Any

def load_config(config_path: str = 'config.yaml', subconfig: str | None = None) -> dict[str, Any]:
   """
   Load configuration from YAML file.
   
   Args:
      config_path: Path to config.yaml file.
      subconfig: Optional top-level section to return instead of the whole file.
      
   Returns:
      Configuration (or the requested section) as a dictionary.

   Raises:
      RuntimeError: File missing, unreadable, or section absent.
   """
   try:
      config_file = Path(config_path)
      if not config_file.exists():
         raise FileNotFoundError(f"config.yaml not found at: {config_path}")

      with open(config_file, 'r', encoding='utf-8') as f:
         config = yaml.safe_load(f) or {}

      if subconfig is None:
         return config
      if subconfig in config:
         return config[subconfig] or {}
      raise KeyError(f"Section '{subconfig}' not found in {config_path}")

   except Exception as e:
      raise RuntimeError(f"Failed to load {config_path}: {e}") from e


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
   """Recursively merge ``override`` into a copy of ``base``."""
   merged = dict(base)
   for key, value in (override or {}).items():
      if isinstance(value, dict) and isinstance(merged.get(key), dict):
         merged[key] = merge_dicts(merged[key], value)
      else:
         merged[key] = value
   return merged
