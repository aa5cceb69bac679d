"""
Configuration Management for StarLesson

Dataclass-based configuration with per-environment presets. Values can be
overridden from `STARLESSON_*` environment variables.
"""

import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class WebConfig:
    """Web server configuration"""
    host: str = "localhost"
    port: int = 5001
    debug: bool = False
    auto_reload: bool = False
    secret_key: Optional[str] = None


@dataclass
class SessionConfig:
    """Browser session lifetime"""
    ttl: int = 3600  # 1 hour
    cleanup_interval: int = 300  # 5 minutes
    auto_cleanup: bool = True


@dataclass
class ReactiveConfig:
    """Reactive graph limits"""
    max_flush_passes: int = 1000
    max_recorded_errors: int = 100
    input_debounce_ms: int = 250


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class ApplicationConfig:
    """Complete application configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    web: WebConfig = field(default_factory=WebConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    reactive: ReactiveConfig = field(default_factory=ReactiveConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ApplicationConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.web.debug = True
            config.web.auto_reload = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.session.auto_cleanup = False
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.web.host = "0.0.0.0"
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'ApplicationConfig':
        """Build configuration from STARLESSON_* environment variables."""
        env = os.environ if environ is None else environ
        name = env.get("STARLESSON_ENV", "development").lower()
        try:
            environment = Environment(name)
        except ValueError:
            environment = Environment.DEVELOPMENT

        config = cls.for_environment(environment)
        config.web.host = env.get("STARLESSON_HOST", config.web.host)
        config.web.port = _get_int(env, "STARLESSON_PORT", config.web.port)
        config.web.secret_key = env.get("STARLESSON_SECRET_KEY", config.web.secret_key)
        config.session.ttl = _get_int(env, "STARLESSON_SESSION_TTL", config.session.ttl)
        config.logging.level = env.get("STARLESSON_LOG_LEVEL", config.logging.level).upper()
        config.logging.file_path = env.get("STARLESSON_LOG_FILE", config.logging.file_path)
        return config

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["environment"] = self.environment.value
        return data


def _get_int(env, name: str, default: int) -> int:
    """Parse integer environment variable."""
    try:
        return int(env.get(name, default))
    except (TypeError, ValueError):
        return default


_config: Optional[ApplicationConfig] = None


def get_config() -> ApplicationConfig:
    """Get the process-wide configuration, reading the environment once."""
    global _config
    if _config is None:
        _config = ApplicationConfig.from_env()
    return _config


def set_config(config: ApplicationConfig) -> None:
    global _config
    _config = config
