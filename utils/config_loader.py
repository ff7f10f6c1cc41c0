"""Configuration loader for export settings"""
import json
import os
import yaml
from dotenv import load_dotenv
from pathlib import Path
from typing import Dict, Any, Optional
from models.config_models import ApigeeConfig, ExportConfig

# Environment variables that fill settings the config file leaves unset
ENV_OVERRIDES = {
    "token": "APIGEE_TOKEN",
    "base_url": "APIGEE_BASE_URL",
    "service_account_key_path": "GOOGLE_APPLICATION_CREDENTIALS",
}


class ConfigLoader:
    """Load and manage export configuration"""

    @staticmethod
    def load_config(config_path: str) -> Dict[str, Any]:
        """Load configuration from JSON or YAML file"""
        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'r') as f:
            if path.suffix == '.json':
                return json.load(f)
            elif path.suffix in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

    @staticmethod
    def load_apigee_config(config_data: Dict[str, Any], organization: Optional[str] = None,
                           env_file: Optional[str] = ".env") -> ApigeeConfig:
        """Load Apigee configuration, filling gaps from the environment"""
        if env_file:
            load_dotenv(env_file)

        apigee_config = dict(config_data.get('apigee', {}))
        for field, env_var in ENV_OVERRIDES.items():
            value = os.environ.get(env_var, "").strip()
            if value and not apigee_config.get(field):
                apigee_config[field] = value

        if organization:
            apigee_config['organization'] = organization

        return ApigeeConfig(**apigee_config)

    @staticmethod
    def load_export_config(config_data: Dict[str, Any]) -> ExportConfig:
        """Load export output settings"""
        return ExportConfig(**config_data.get('export', {}))

    @staticmethod
    def create_default_config() -> Dict[str, Any]:
        """Create a default configuration template"""
        return {
            "apigee": {
                "organization": "your-apigee-org",
                "base_url": "https://apigee.googleapis.com/v1",
                "service_account_key_path": "/path/to/service-account-key.json",
                "page_size": 1000
            },
            "export": {
                "format": "yaml",
                "output": None
            }
        }

    @staticmethod
    def save_config(config_data: Dict[str, Any], output_path: str):
        """Save configuration to file"""
        path = Path(output_path)

        with open(path, 'w') as f:
            if path.suffix == '.json':
                json.dump(config_data, f, indent=2)
            elif path.suffix in ['.yaml', '.yml']:
                yaml.dump(config_data, f, default_flow_style=False, sort_keys=False)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")
