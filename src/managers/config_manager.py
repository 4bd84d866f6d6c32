"""
Config Manager

Loads parser.yaml (with include system support) and builds the parser,
sampler and logger settings from it.
"""

import random
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.config import ParserSettings, ParserThresholds
from models.enums import DoubleRangeMode, LogCategory, LogLevel
from models.errors import ConfigError
from particle.sampler import UniformSampler
from particle.value_parser import ValueParser
from utils.logger import configure_logger, get_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Parser configuration manager with include system support

    Loads parser.yaml and processes the include: directive to merge modular
    YAML files. Falls back to factory_defaults.yaml when the main file is
    missing or unreadable.

    Example:
        config = ConfigManager()
        config.load()

        parser = config.create_parser()
        sampler = config.create_sampler()
        parser.parse("[0.7 0.9]")
    """

    def __init__(self, config_path="config/parser.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main parser.yaml (relative to src/, or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self._settings: Optional[ParserSettings] = None

    def load(self) -> ParserSettings:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main parser.yaml
        2. If it has 'include:' list, load and merge those files
        3. Fallback to factory defaults on failure
        4. Build typed settings (raises ConfigError on bad values)

        Returns:
            Parsed ParserSettings
        """
        full_path = SRC_DIR / self.config_path
        try:
            main_config = self._read_yaml(full_path)

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config, full_path.parent)
            else:
                self.data = main_config

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load parser config", path=str(full_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = SRC_DIR / self.factory_defaults_path
            try:
                self.data = self._read_yaml(defaults_path)
            except (OSError, yaml.YAMLError) as defaults_ex:
                raise ConfigError(
                    "Factory defaults could not be loaded",
                    details={"path": str(defaults_path), "error": str(defaults_ex)},
                ) from defaults_ex

        self._settings = self._build_settings()
        return self._settings

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise yaml.YAMLError(f"Top level of {path.name} must be a mapping")
        return data

    def _load_with_includes(self, main_config: Dict[str, Any], config_dir: Path) -> Dict[str, Any]:
        """
        Merge included files in order; keys of the main file win

        Args:
            main_config: Parsed main file (with 'include' list)
            config_dir: Directory containing the included files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}
        include_list: List[str] = main_config.get('include') or []

        for filename in include_list:
            file_data = self._read_yaml(config_dir / filename)
            merged.update(file_data)
            log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        merged.update({k: v for k, v in main_config.items() if k != 'include'})
        log.info("Config merge complete", total_keys=len(merged))
        return merged

    # ===== Typed settings =====

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' must be a mapping", details={"section": name})
        return section

    def _build_settings(self) -> ParserSettings:
        parser_cfg = self._section('parser')
        logging_cfg = self._section('logging')
        random_cfg = self._section('random')

        thresholds_raw = parser_cfg.get('thresholds') or {}
        if not isinstance(thresholds_raw, dict):
            raise ConfigError("parser.thresholds must be a mapping")
        for key in ParserThresholds.unknown_keys(thresholds_raw):
            log.warn(f"Unknown threshold '{key}' ignored")
        thresholds = ParserThresholds.from_dict(thresholds_raw)

        try:
            double_range = Serializer.str_to_enum(parser_cfg.get('double_range', 'WIDTH'), DoubleRangeMode)
            log_level = Serializer.str_to_enum(logging_cfg.get('level', 'INFO'), LogLevel)
        except ValueError as ex:
            raise ConfigError(str(ex)) from ex

        seed = random_cfg.get('seed')
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ConfigError("random.seed must be an integer", details={"seed": repr(seed)})

        settings = ParserSettings(
            thresholds=thresholds,
            double_range=double_range,
            log_level=log_level,
            log_colors=bool(logging_cfg.get('colors', True)),
            seed=seed,
        )
        log.debug(
            "Parser settings ready",
            double_range=double_range.name,
            log_level=log_level.name,
            seed=seed,
        )
        return settings

    @property
    def settings(self) -> ParserSettings:
        if self._settings is None:
            self.load()
        return self._settings

    # ===== Factories =====

    def apply_logging(self) -> None:
        """Push the configured level and colors to the logger singleton"""
        configure_logger(self.settings.log_level, self.settings.log_colors)

    def create_sampler(self) -> UniformSampler:
        seed = self.settings.seed
        return UniformSampler(random.Random(seed) if seed is not None else None)

    def create_parser(self, sampler: Optional[UniformSampler] = None) -> ValueParser:
        return ValueParser(
            thresholds=self.settings.thresholds,
            double_range=self.settings.double_range,
            sampler=sampler or self.create_sampler(),
        )
