#!/usr/bin/env python3
"""
Configuration loader with multi-layer merging.

Layers (low to high priority):
1. System defaults (presets/defaults.json)
2. User file (--config-file or PROCTOR_CONFIG_FILE)
3. Environment variables (PROCTOR_<KEY>)
4. User CLI options

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import json
import logging
import os
from copy import deepcopy
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from proctor.core.errors import ConfigurationError, create_error_context

logger = logging.getLogger(__name__)

ENV_PREFIX = "PROCTOR_"
CONFIG_FILE_ENV = "PROCTOR_CONFIG_FILE"
DEFAULT_TEMPLATE = Path(__file__).resolve().parent.parent / "templates" / "classroom.json"


@dataclass(frozen=True)
class ProctorConfig:
    """Resolved configuration for one invocation."""

    box_name: str
    region: str
    atlas_url: str
    bucket: str = ""
    profile: str = ""
    template_file: str = ""

    def require_bucket(self) -> str:
        """Return the key bucket, failing if none was configured."""
        if not self.bucket:
            raise ConfigurationError(
                "no S3 bucket configured for SSH keys",
                context=create_error_context("load_config", component="ProctorConfig"),
                suggestions=[
                    "Pass --bucket <name>",
                    f"Or export {ENV_PREFIX}BUCKET=<name>",
                ],
            )
        return self.bucket

    def load_template(self) -> str:
        """Read the CloudFormation template body."""
        path = Path(self.template_file) if self.template_file else DEFAULT_TEMPLATE
        try:
            return path.read_text()
        except OSError as e:
            raise ConfigurationError(
                f"could not read stack template {path}: {e}",
                context=create_error_context(
                    "load_template", component="ProctorConfig", resource=str(path)
                ),
                cause=e,
            ) from e


class ConfigLoader:
    """Merges configuration layers into a ProctorConfig."""

    PRESET_DIR = Path(__file__).resolve().parent.parent / "presets"

    @classmethod
    def load_preset(cls, preset_path: str = "defaults.json") -> Dict[str, Any]:
        """Load a preset JSON file shipped with the package."""
        return cls._read_json(cls.PRESET_DIR / preset_path)

    @classmethod
    def load_user_file(cls, path: Optional[str]) -> Dict[str, Any]:
        """Load a user config file; a missing path means no overrides."""
        if not path:
            return {}
        file_path = Path(path)
        if not file_path.exists():
            raise ConfigurationError(
                f"config file not found: {path}",
                context=create_error_context("load_config", resource=path),
            )
        return cls._read_json(file_path)

    @classmethod
    def load_env(cls, environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Collect PROCTOR_<KEY> variables for known keys."""
        environ = os.environ if environ is None else environ
        known = {f.name for f in fields(ProctorConfig)}
        overrides = {}
        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX) or key == CONFIG_FILE_ENV:
                continue
            name = key[len(ENV_PREFIX):].lower()
            if name in known:
                overrides[name] = value
        return overrides

    @classmethod
    def merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Override wins; None values in the override are ignored."""
        result = deepcopy(base)
        for key, value in override.items():
            if value is None:
                continue
            result[key] = deepcopy(value)
        return result

    @classmethod
    def load_config(
        cls,
        config_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> ProctorConfig:
        """
        Load complete configuration with multi-layer merging.

        Args:
            config_file: Optional user JSON file (falls back to PROCTOR_CONFIG_FILE)
            overrides: Values from CLI options; None entries are skipped
            environ: Environment mapping, os.environ by default

        Returns:
            Frozen ProctorConfig

        Raises:
            ConfigurationError: If a file is missing or not valid JSON
        """
        environ = os.environ if environ is None else environ
        config_file = config_file or environ.get(CONFIG_FILE_ENV)

        config = cls.load_preset()
        config = cls.merge(config, cls.load_user_file(config_file))
        config = cls.merge(config, cls.load_env(environ))
        config = cls.merge(config, overrides or {})

        known = {f.name for f in fields(ProctorConfig)}
        unknown = sorted(k for k in config if k not in known and not k.startswith("_"))
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        values = {k: str(v) for k, v in config.items() if k in known}
        logger.debug("Resolved configuration: %s", values)
        return ProctorConfig(**values)

    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"invalid JSON in config file {path}: {e}",
                context=create_error_context("load_config", resource=str(path)),
                cause=e,
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"config file {path} must contain a JSON object",
                context=create_error_context("load_config", resource=str(path)),
            )
        return data
