"""Options file loader and validation."""

from pathlib import Path
from typing import Any, Dict, List
import yaml

from saladplate.exceptions import ValidationError, ConfigValidationError


class ConfigLoader:
    """Loads and validates a YAML options file.

    Example::

        debug: false
        directory: build
        suffix: .conf
        environment:
          REGION: eu-west-1
    """

    STRING_FIELDS = ('output', 'directory', 'suffix')
    KNOWN_FIELDS = {'debug', 'environment', *STRING_FIELDS}

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, config_path: Path) -> Dict[str, Any]:
        """Load and validate an options file.

        Returns:
            Validated options; ``environment`` values are coerced to strings

        Raises:
            ConfigValidationError: If the file cannot be parsed or is invalid
        """
        self.errors = []
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load options file: {e}", str(config_path))
            self._raise_validation_errors()

        # An empty file is an empty set of options
        if config is None:
            return {}

        if not isinstance(config, dict):
            self._add_error("Options file must be a YAML mapping", str(config_path))
            self._raise_validation_errors()

        for key in config:
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'", str(config_path))

        if 'debug' in config and not isinstance(config['debug'], bool):
            self._add_error(f"'debug' must be a boolean, got {type(config['debug']).__name__}", str(config_path))

        for name in self.STRING_FIELDS:
            if name in config and not isinstance(config[name], str):
                self._add_error(f"'{name}' must be a string, got {type(config[name]).__name__}", str(config_path))
            elif name in config and not config[name].strip():
                self._add_error(f"'{name}' cannot be empty", str(config_path))

        if 'environment' in config:
            config['environment'] = self._validate_environment(config['environment'], str(config_path))

        if self.errors:
            self._raise_validation_errors()

        return config

    def _validate_environment(self, environment: Any, path: str) -> Dict[str, str]:
        if environment is None:
            return {}
        if not isinstance(environment, dict):
            self._add_error("'environment' must be a mapping of names to values", path)
            return {}

        result = {}
        for name, value in environment.items():
            if not isinstance(name, str) or not name:
                self._add_error(f"'environment' key {name!r} must be a non-empty string", path)
            elif isinstance(value, (dict, list)):
                self._add_error(f"'environment.{name}' must be a scalar", path)
            elif value is None:
                result[name] = ""
            elif isinstance(value, bool):
                result[name] = 'true' if value else 'false'
            else:
                result[name] = str(value)
        return result

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise ConfigValidationError with accumulated errors."""
        raise ConfigValidationError(self.errors)
