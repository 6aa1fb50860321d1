"""Configuration management for Metabase Migration Tool."""

from typing import Optional, Dict, Any
from pathlib import Path
import os

from pydantic import BaseModel, Field, validator
import yaml
from dotenv import load_dotenv


class MetabaseInstanceConfig(BaseModel):
    """Configuration for a Metabase instance."""

    url: str = Field(..., description='Metabase instance URL')
    username: Optional[str] = Field(default=None, description='Login user name')
    password: Optional[str] = Field(default=None, description='Login password')
    api_key: Optional[str] = Field(default=None, description='Metabase API key')
    timeout: int = Field(default=30, description='Request timeout in seconds')
    max_concurrent_requests: int = Field(
        default=10, description='Concurrent requests when hydrating dashboards'
    )

    @validator('url')
    def validate_url(cls, v):
        """Validate Metabase URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v.rstrip('/')

    @validator('api_key', always=True)
    def validate_auth_complete(cls, v, values):
        """Ensure an API key or a username/password pair is provided."""
        if not v and not (values.get('username') and values.get('password')):
            raise ValueError('Either api_key or username and password must be provided')
        return v

    @validator('timeout', 'max_concurrent_requests')
    def validate_positive(cls, v):
        """Validate value is positive."""
        if v <= 0:
            raise ValueError('Value must be positive')
        return v


class ExportConfig(BaseModel):
    """Export-specific configuration."""

    exclude_personal_collections: bool = Field(
        default=True, description='Skip personal collections and their contents'
    )
    target_collection_id: Optional[int] = Field(
        default=None, description='Only export this collection subtree'
    )
    output_file: str = Field(
        default='metabase-state.json', description='Exported state file path'
    )

    @validator('target_collection_id')
    def validate_target_collection_id(cls, v):
        """Validate target collection id is positive."""
        if v is not None and v <= 0:
            raise ValueError('Target collection id must be positive')
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default='INFO', description='Log level')
    file: Optional[str] = Field(default=None, description='Log file path')
    format: Optional[str] = Field(default=None, description='Log format')

    @validator('level')
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()


class Config(BaseModel):
    """Main configuration class for Metabase Migration Tool."""

    source: MetabaseInstanceConfig = Field(..., description='Source Metabase instance')
    export: ExportConfig = Field(
        default_factory=ExportConfig, description='Export settings'
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description='Logging settings'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'forbid'

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        return cls(**config_data)

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables."""
        load_dotenv()

        target_collection_id = os.getenv('EXPORT_TARGET_COLLECTION_ID')

        config_data = {
            'source': {
                'url': os.getenv('METABASE_URL'),
                'username': os.getenv('METABASE_USERNAME'),
                'password': os.getenv('METABASE_PASSWORD'),
                'api_key': os.getenv('METABASE_API_KEY'),
                'timeout': int(os.getenv('METABASE_TIMEOUT', 30)),
            },
            'export': {
                'exclude_personal_collections': os.getenv(
                    'EXPORT_EXCLUDE_PERSONAL', 'true'
                ).lower()
                == 'true',
                'target_collection_id': int(target_collection_id)
                if target_collection_id
                else None,
                'output_file': os.getenv('EXPORT_OUTPUT_FILE'),
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL', 'INFO'),
                'file': os.getenv('LOG_FILE'),
            },
        }

        config_data = cls._remove_none_values(config_data)

        return cls(**config_data)

    @staticmethod
    def _remove_none_values(data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively remove None values from dictionary."""
        if isinstance(data, dict):
            return {
                k: Config._remove_none_values(v)
                for k, v in data.items()
                if v is not None
            }
        return data

    def to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(
                self.model_dump(), f, default_flow_style=False, indent=2, sort_keys=False
            )


def create_config_template(output_path: str) -> None:
    """Create a configuration template file."""
    template_config = {
        'source': {
            'url': 'https://metabase-source.example.com',
            'username': 'admin@example.com',
            'password': 'your-password',
            'timeout': 30,
            'max_concurrent_requests': 10,
        },
        'export': {
            'exclude_personal_collections': True,
            'target_collection_id': None,
            'output_file': 'metabase-state.json',
        },
        'logging': {
            'level': 'INFO',
            'file': 'export.log',
        },
    }

    config_file = Path(output_path)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, 'w', encoding='utf-8') as f:
        yaml.dump(
            template_config, f, default_flow_style=False, indent=2, sort_keys=False
        )
