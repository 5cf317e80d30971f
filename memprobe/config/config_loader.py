"""
Configuration manager for memory measurements.

This module provides the ConfigLoader class for loading and validating
the probe configuration from YAML files.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from memprobe.config.measurement_config import MeasurementConfig
from memprobe.config.probe_config import ProbeConfig
from memprobe.config.target_spec import DEFAULT_ARGS, DEFAULT_NOTIFY_FD_ENV, TargetSpec
from memprobe.consts.errors import ConfigError
from memprobe.util.file_utils import resolve_dir

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config_yaml"


class ConfigLoader:

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH, env: Optional[str] = None):
        self.config_path = Path(config_path)
        self.env = env
        self.config_data = self._load_config()

    def _read_yaml(self, config_file: Path) -> Dict[str, Any]:
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_file}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")
        return data

    def _load_config(self) -> ProbeConfig:
        """
        Load and parse the probe configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            ProbeConfig: Target and measurement settings
        """
        # Load base YAML file
        data = self._read_yaml(self.config_path / "config.yaml")

        # Load environment-specific override if specified
        if self.env:
            env_data = self._read_yaml(self.config_path / f"config_{self.env}.yaml")
            # Merge per section, overriding keys present in the env file
            for section, values in env_data.items():
                if isinstance(values, dict) and isinstance(data.get(section), dict):
                    data[section].update(values)
                else:
                    data[section] = values

        return ProbeConfig(
            target=self._parse_target(data.get("target") or {}),
            measurement=self._parse_measurement(data.get("measurement") or {}),
        )

    def _parse_target(self, target: Dict[str, Any]) -> TargetSpec:
        executable = target.get("executable")
        if not executable:
            raise ConfigError("target.executable is required")

        args = target.get("args", DEFAULT_ARGS)
        if not isinstance(args, list):
            raise ConfigError("target.args must be a list")

        env = target.get("env") or {}
        if not isinstance(env, dict):
            raise ConfigError("target.env must be a mapping")

        try:
            cwd = resolve_dir(target.get("cwd"))
        except (FileNotFoundError, NotADirectoryError) as e:
            raise ConfigError(f"target.cwd: {e}") from e

        return TargetSpec(
            executable=str(executable),
            args=[str(arg) for arg in args],
            cwd=cwd,
            env={str(key): str(value) for key, value in env.items()},
            notify_fd_env=str(target.get("notify_fd_env", DEFAULT_NOTIFY_FD_ENV)),
        )

    def _parse_measurement(self, measurement: Dict[str, Any]) -> MeasurementConfig:
        try:
            return MeasurementConfig(**measurement)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid measurement settings: {e}") from e


if __name__ == "__main__":

    # python3 -m memprobe.config.config_loader

    config = ConfigLoader(DEFAULT_CONFIG_PATH, env="dev")
    print(config.config_data)
