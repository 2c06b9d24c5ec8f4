import yaml
import os
from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///thesis_match.db"
    echo: bool = False


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class ResultPolicy(BaseModel):
    """Truncation applied to ranked supervisor suggestions."""
    top_k: int = Field(default=20, ge=1, le=500)


class MatchingConfig(BaseModel):
    """
    Matching configuration.

    The 0.7/0.3 topical/capacity weighting is a fixed policy and lives in
    core.matching.scorer, not here.
    """
    result_policy: ResultPolicy = Field(default_factory=ResultPolicy)


class AssignmentConfig(BaseModel):
    # keyed = per-student/per-supervisor mutex, none = no in-process locking
    lock_strategy: Literal["keyed", "none"] = "keyed"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    assignment: AssignmentConfig = Field(default_factory=AssignmentConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    if name not in data or data[name] is None:
        data[name] = {}
    return data[name]


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides on top of the YAML values."""
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        _section(data, 'database')['url'] = env_db_url

    env_host = os.environ.get("WEB_HOST")
    if env_host:
        _section(data, 'web')['host'] = env_host

    env_port = os.environ.get("WEB_PORT")
    if env_port:
        _section(data, 'web')['port'] = int(env_port)

    env_lock = os.environ.get("LOCK_STRATEGY")
    if env_lock:
        _section(data, 'assignment')['lock_strategy'] = env_lock.strip().lower()

    env_level = os.environ.get("LOG_LEVEL")
    if env_level:
        _section(data, 'logging')['level'] = env_level.strip().upper()

    return data


def load_config(config_path: Optional[str] = "config.yaml") -> AppConfig:
    """
    Load the application configuration.

    Looks for ``config_path`` relative to the working directory first, then
    next to the project root. A missing file yields the defaults.
    """
    if config_path and not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", os.path.basename(config_path))

    data: Dict[str, Any] = {}
    if config_path and os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data)
    return AppConfig(**data)
