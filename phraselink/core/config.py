"""
PhraseLink Central Configuration
Document locations, normalization options and logging settings
"""

from dataclasses import dataclass
from typing import Optional
import os

import yaml

_TRUTHY = ("true", "1", "yes")


@dataclass
class DataConfig:
    """Locations of the persisted phrase and lookup documents"""

    phrases_path: str = "./data/phrases.json"
    lookup_path: str = "./data/lookup.json"


@dataclass
class NormalizerConfig:
    """Configuration for text normalization"""

    # Replace each word by its base form (requires a spaCy model)
    lemmatize: bool = False
    spacy_model: str = "en_core_web_sm"


@dataclass
class PhraseLinkConfig:
    """Main configuration class combining all settings"""

    data: DataConfig
    normalizer: NormalizerConfig

    # Logging
    log_level: str = "INFO"

    # Regeneration output ("json" or "yaml")
    output_format: str = "json"

    def __init__(self,
                 data: Optional[DataConfig] = None,
                 normalizer: Optional[NormalizerConfig] = None):
        """Initialize with optional custom configurations"""
        self.data = data or DataConfig()
        self.normalizer = normalizer or NormalizerConfig()
        self.log_level = "INFO"
        self.output_format = "json"

        # Override with environment variables if present
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load configuration overrides from environment variables"""
        if os.getenv("PHRASELINK_PHRASES_PATH"):
            self.data.phrases_path = os.getenv("PHRASELINK_PHRASES_PATH")

        if os.getenv("PHRASELINK_LOOKUP_PATH"):
            self.data.lookup_path = os.getenv("PHRASELINK_LOOKUP_PATH")

        if os.getenv("PHRASELINK_LEMMATIZE", "").lower() in _TRUTHY:
            self.normalizer.lemmatize = True

        if os.getenv("PHRASELINK_SPACY_MODEL"):
            self.normalizer.spacy_model = os.getenv("PHRASELINK_SPACY_MODEL")

        if os.getenv("PHRASELINK_LOG_LEVEL"):
            self.log_level = os.getenv("PHRASELINK_LOG_LEVEL").upper()

        # Debug override
        if os.getenv("PHRASELINK_DEBUG", "").lower() in _TRUTHY:
            self.log_level = "DEBUG"

    @classmethod
    def load_from_file(cls, config_path: str) -> 'PhraseLinkConfig':
        """Load configuration from YAML file"""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}

            data = DataConfig(**config_data.get('data', {}))
            normalizer = NormalizerConfig(**config_data.get('normalizer', {}))

            config = cls(data=data, normalizer=normalizer)

            # Override other settings
            for key, value in config_data.items():
                if key not in ['data', 'normalizer'] and hasattr(config, key):
                    setattr(config, key, value)

            return config

        except (OSError, TypeError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    def save_to_file(self, config_path: str):
        """Save configuration to YAML file"""
        config_data = {
            'data': {
                'phrases_path': self.data.phrases_path,
                'lookup_path': self.data.lookup_path
            },
            'normalizer': {
                'lemmatize': self.normalizer.lemmatize,
                'spacy_model': self.normalizer.spacy_model
            },
            'log_level': self.log_level,
            'output_format': self.output_format
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)
