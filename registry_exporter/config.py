"""Configuration models using Pydantic for validation."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
import os


class ExporterConfig(BaseModel):
    """Prometheus scrape endpoint configuration."""
    enabled: bool = True
    port: int = 9400
    bind_address: str = "0.0.0.0"
    help_source: str = "Dropwizard"

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError(f"Port out of range: {v}")
        return v


class RegistryConfig(BaseModel):
    """Where to find the application's metrics registry."""
    target: str  # "package.module:attribute"

    @field_validator('target')
    @classmethod
    def validate_target(cls, v):
        module_name, sep, attribute = v.partition(":")
        if not sep or not module_name or not attribute:
            raise ValueError(f"Registry target must look like 'module:attribute', got '{v}'")
        return v


class GlobalConfig(BaseModel):
    """Global configuration settings."""
    log_level: str = "INFO"
    control_api_enabled: bool = True
    control_api_port: int = 8081


class Config(BaseModel):
    """Root configuration model."""
    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    exporter: ExporterConfig = Field(default_factory=ExporterConfig)
    registry: RegistryConfig

    model_config = ConfigDict(populate_by_name=True)


def load_config(config_path: str) -> Config:
    """Load and validate configuration from YAML file."""
    import yaml

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    if env_target := os.getenv('METRICS_REGISTRY'):
        raw_config.setdefault('registry', {})['target'] = env_target

    if env_port := os.getenv('EXPORTER_PORT'):
        raw_config.setdefault('exporter', {})['port'] = env_port

    if env_log_level := os.getenv('LOG_LEVEL'):
        raw_config.setdefault('global', {})['log_level'] = env_log_level

    try:
        config = Config(**raw_config)
        return config
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")
