"""
Layered configuration loading (YAML + environment + CLI overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import jsonschema
import yaml

from stitcher.data import read_json, read_yaml as read_bundled_yaml
from ..exceptions import ConfigError
from ..utils.io import read_yaml
from ..utils.merge import deep_merge
from ..utils.profiling import span
from .models import StitcherConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAMES = (".stitcher.yml", ".stitcher.yaml")
ENV_PREFIX = "STITCHER_"


class ConfigManager:
    """Load, merge, and validate html-stitcher configuration.

    Sources (highest to lowest priority):
    1. Explicit overrides (CLI flags), passed to ``load()``
    2. Environment variables: STITCHER_* (``__`` separates nested keys)
    3. Explicit config file (``--config``), else ``.stitcher.yml`` /
       ``.stitcher.yaml`` in ``project_dir``
    4. Bundled defaults: stitcher.data/config/defaults.yaml
    """

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        *,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.project_dir = Path(project_dir) if project_dir else None
        self.config_path = Path(config_path) if config_path else None
        self.environ = os.environ if environ is None else environ
        self._env_keys: Dict[str, str] = {}

    def find_project_config(self) -> Optional[Path]:
        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigError(
                    f"Config file not found: {self.config_path}",
                    context={"path": str(self.config_path)},
                )
            return self.config_path
        if self.project_dir is None:
            return None
        for name in PROJECT_CONFIG_NAMES:
            candidate = self.project_dir / name
            if candidate.is_file():
                return candidate
        return None

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a mapping", context={"path": str(path)})
        return data

    # ---------- environment overrides ----------

    def _coerce_type(self, raw: str) -> Any:
        value = raw.strip()
        low = value.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", value):
            return int(value)
        if re.fullmatch(r"[-+]?(\d*\.\d+|\d+\.\d*)", value):
            return float(value)
        if (value.startswith("[") and value.endswith("]")) or (value.startswith("{") and value.endswith("}")):
            try:
                return json.loads(value)
            except ValueError:
                return value
        return value

    def _iter_env_overrides(self) -> Iterator[Tuple[str, List[str], Any]]:
        for key in sorted(self.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX) :]
            segments = raw.split("__") if "__" in raw else raw.split("_")
            if not raw or any(seg == "" for seg in segments):
                logger.warning("Ignoring malformed environment override %s", key)
                continue
            yield key, [seg.lower() for seg in segments], self._coerce_type(self.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> str:
        """Set ``value`` at ``path`` and return the top-level key used."""
        current = root
        top = ""
        for index, part in enumerate(path):
            # Match existing camelCase keys case-insensitively (STITCHER_ROOTGLOB -> rootGlob).
            existing = {k.lower(): k for k in current.keys() if isinstance(k, str)}
            key = existing.get(part, part)
            if index == 0:
                top = key
            if index == len(path) - 1:
                current[key] = value
                return top
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        return top

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        self._env_keys = {}
        for env_key, path, value in self._iter_env_overrides():
            self._env_keys[self._set_nested(cfg, path, value)] = env_key
        return cfg

    # ---------- loading ----------

    def load_dict(self, overrides: Optional[Mapping[str, Any]] = None, *, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration as a plain dictionary."""
        with span("config.load"):
            cfg = copy.deepcopy(read_bundled_yaml("config", "defaults.yaml"))

            project_file = self.find_project_config()
            if project_file is not None:
                logger.info("Using config %s", project_file)
                cfg = deep_merge(cfg, self.load_yaml(project_file))

            cfg = self.apply_env_overrides(cfg)
            if overrides:
                cfg = deep_merge(cfg, dict(overrides))

            log_cfg = cfg.get("logging")
            if isinstance(log_cfg, dict) and isinstance(log_cfg.get("level"), str):
                log_cfg["level"] = log_cfg["level"].upper()

            if validate:
                self.validate(cfg)
        return cfg

    def validate(self, cfg: Dict[str, Any]) -> None:
        schema = read_json("schemas", "config.schema.json")
        try:
            jsonschema.validate(instance=cfg, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            message = f"Invalid configuration at {location}: {exc.message}"
            context: Dict[str, Any] = {"path": location}
            hint = self._env_hint(cfg, schema)
            if hint:
                message = f"{message} ({hint})"
                context["hint"] = hint
            raise ConfigError(message, context=context) from exc

    def _env_hint(self, cfg: Mapping[str, Any], schema: Mapping[str, Any]) -> Optional[str]:
        """Suggest the joined spelling for env vars that created unknown top-level keys."""
        known = set(schema.get("properties", {}))
        for top, env_key in self._env_keys.items():
            if top in cfg and top not in known:
                joined = ENV_PREFIX + env_key[len(ENV_PREFIX) :].replace("_", "")
                return f"{env_key} set '{top}'; did you mean {joined}?"
        return None

    def load(self, overrides: Optional[Mapping[str, Any]] = None) -> StitcherConfig:
        return StitcherConfig.from_dict(self.load_dict(overrides))


def load_config(
    project_dir: Optional[Path] = None,
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> StitcherConfig:
    """Convenience wrapper around ``ConfigManager(...).load(overrides)``."""
    return ConfigManager(project_dir, config_path=config_path).load(overrides)


__all__ = ["ConfigManager", "load_config", "PROJECT_CONFIG_NAMES", "ENV_PREFIX"]
