"""配置管理器

提供 .linker.yaml 配置文件的加载、验证、合并和保存功能。
配置文件是可选的，不存在时使用默认配置。

查找顺序：显式传入的路径 > 环境变量 LINKER_CONFIG > ~/.linker.yaml
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from linker.core.exceptions import ConfigException, ConfigIOError, ConfigParseError, ConfigValidationError
from linker.core.logger import LEVELS, get_logger

logger = get_logger("config_manager")

CONFIG_ENV_VAR = "LINKER_CONFIG"


class ConfigManager:
    """配置管理器"""

    DEFAULT_CONFIG = {
        "reveal": {
            "enabled": True,
        },
        "display": {
            "colors": True,
        },
        "logging": {
            "level": "INFO",
            "json": False,
            "log_dir": None,
        },
    }

    CONFIG_FILENAME = ".linker.yaml"

    def __init__(self, config_path: Optional[Path] = None):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，为 None 时按环境变量和用户目录查找
        """
        self._explicit_path = Path(config_path).expanduser() if config_path else None
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config_path(self) -> Path:
        """获取配置文件路径"""
        if self._explicit_path is not None:
            return self._explicit_path
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / self.CONFIG_FILENAME

    def get_default_config(self) -> Dict[str, Any]:
        """获取默认配置的深拷贝"""
        return copy.deepcopy(self.DEFAULT_CONFIG)

    def load_config(self) -> Dict[str, Any]:
        """加载配置文件

        Returns:
            与默认配置深度合并后的配置字典

        Raises:
            ConfigIOError: 文件读取失败时抛出
            ConfigParseError: YAML 解析失败时抛出
            ConfigValidationError: 配置值不合法时抛出
        """
        path = self.config_path

        if not path.exists():
            logger.debug("Configuration file not found, using defaults", path=str(path))
            self._config = self.get_default_config()
            return self._config

        logger.info("Loading configuration", path=str(path))

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML configuration", path=str(path), error=str(e))
            raise ConfigParseError(f"Failed to parse YAML configuration: {e}", details=str(e))
        except OSError as e:
            logger.error("Failed to read configuration file", path=str(path), error=str(e))
            raise ConfigIOError(f"Failed to read configuration file: {e}", details=str(e))

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                "Configuration validation failed: top level must be a mapping"
            )

        merged = self.merge_configs(self.get_default_config(), config_data)
        self.validate_config(merged)

        self._config = merged
        return self._config

    def validate_config(self, config: Optional[Dict[str, Any]] = None) -> bool:
        """验证配置结构和值

        Raises:
            ConfigValidationError: 配置验证失败时抛出
        """
        cfg = config if config is not None else self._config

        if cfg is None:
            raise ConfigValidationError("No configuration loaded or provided")

        errors = []

        for section in ("reveal", "display", "logging"):
            if not isinstance(cfg.get(section), dict):
                errors.append(f"{section} must be a dictionary")

        reveal = cfg.get("reveal")
        if isinstance(reveal, dict) and not isinstance(reveal.get("enabled"), bool):
            errors.append("reveal.enabled must be a boolean")

        display = cfg.get("display")
        if isinstance(display, dict) and not isinstance(display.get("colors"), bool):
            errors.append("display.colors must be a boolean")

        logging_cfg = cfg.get("logging")
        if isinstance(logging_cfg, dict):
            level = logging_cfg.get("level")
            if not isinstance(level, str) or level.upper() not in LEVELS:
                errors.append(f"logging.level must be one of {list(LEVELS)}")
            if not isinstance(logging_cfg.get("json"), bool):
                errors.append("logging.json must be a boolean")
            log_dir = logging_cfg.get("log_dir")
            if log_dir is not None and not isinstance(log_dir, str):
                errors.append("logging.log_dir must be a string or null")

        if errors:
            logger.error("Configuration validation failed", errors=errors)
            raise ConfigValidationError(f"Configuration validation failed: {'; '.join(errors)}")

        return True

    def merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """深度合并配置，字典递归合并，其余值直接覆盖"""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self.merge_configs(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def save_config(self, config: Optional[Dict[str, Any]] = None) -> None:
        """保存配置到文件

        Raises:
            ConfigIOError: 文件写入失败时抛出
            ConfigValidationError: 配置验证失败时抛出
        """
        cfg = config if config is not None else self._config
        save_path = self.config_path

        if cfg is None:
            raise ConfigException("No configuration to save")

        self.validate_config(cfg)

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(save_path, "w", encoding="utf-8") as f:
                yaml.dump(
                    cfg,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
        except OSError as e:
            logger.error("Failed to write configuration file", path=str(save_path), error=str(e))
            raise ConfigIOError(f"Failed to write configuration file: {e}", details=str(e))

        logger.info("Configuration saved successfully", path=str(save_path))
        self._config = cfg

    def get(self, key_path: str, default: Any = None) -> Any:
        """获取配置值，支持点号分隔的路径

        例如: get("reveal.enabled")
        """
        if self._config is None:
            self.load_config()

        value = self._config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """设置配置值，支持点号分隔的路径

        Raises:
            ConfigValidationError: 设置后的配置不合法
        """
        if self._config is None:
            self.load_config()

        candidate = copy.deepcopy(self._config)
        keys = key_path.split(".")
        target = candidate
        for key in keys[:-1]:
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value

        self.validate_config(candidate)
        self._config = candidate
        logger.debug("Set configuration value", key_path=key_path)


def parse_value(text: str) -> Any:
    """把命令行上的字符串解析为 YAML 标量（true/false/null/数字）"""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text
