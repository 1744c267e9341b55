import argparse
import yaml
import importlib.resources
from pathlib import Path
from typing import Any, Dict
from nbitk.config import Config
from csv_to_fasta.errors import ConfigError


class ValidationError(ConfigError):
    """Exception raised when configuration validation fails."""
    pass


class SchemaConfig(Config):
    """
    Schema-driven configuration class that extends the base Config class.

    This class loads a YAML schema that defines all configuration parameters,
    their types, defaults, choices, short flags and help text. It can
    automatically generate argparse parsers and validate configuration values.

    Examples:
        >>> config = SchemaConfig()
        >>> parser = argparse.ArgumentParser()
        >>> config.populate_argparse(parser)
        >>> config.set('sep', '\\t')
        >>> config.get('sep')
        '\\t'
    """

    STANDARD_KEYS = {'type', 'default', 'choices', 'help', 'short'}
    VALID_TYPES = ['str', 'int', 'bool', 'Path']

    def __init__(self, schema_package: str = "csv_to_fasta.config"):
        """
        Initialize the schema-driven configuration.

        :param schema_package: Package containing the schema.yaml file
        """
        # Initialize parent without loading any config
        super().__init__()
        self.schema_package = schema_package
        self.schema: Dict[str, Any] = {}
        self._load_schema()
        self._initialize_with_defaults()

    def _load_schema(self) -> None:
        """Load the schema from the package resources."""
        try:
            with importlib.resources.open_text(self.schema_package, "schema.yaml") as f:
                self.schema = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Schema file not found in package {self.schema_package}")
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing schema file: {e}")

        self._validate_schema()

    def _validate_schema(self) -> None:
        """Validate that every schema entry is a well-formed parameter."""
        for key, spec in self.schema.items():
            if not isinstance(spec, dict):
                raise ValidationError(f"Schema entry '{key}' must be a dictionary")

            if 'type' not in spec:
                raise ValidationError(f"Parameter schema entry '{key}' missing required 'type' field")

            if spec['type'] not in self.VALID_TYPES:
                raise ValidationError(f"Parameter schema entry '{key}' has invalid type '{spec['type']}'. "
                                      f"Valid types: {self.VALID_TYPES}")

            unknown = set(spec.keys()) - self.STANDARD_KEYS
            if unknown:
                raise ValidationError(f"Parameter schema entry '{key}' has unknown fields: {sorted(unknown)}")

            if 'choices' in spec and not isinstance(spec['choices'], list):
                raise ValidationError(f"Parameter schema entry '{key}' choices must be a list")

    def _initialize_with_defaults(self) -> None:
        """Initialize configuration with default values from schema."""
        self.config_data = {}
        self.initialized = True
        for key, spec in self.schema.items():
            self.config_data[key] = spec.get('default')

    def load_config(self, config_path: str) -> None:
        """
        Override parent method to prevent loading external config files.

        :param config_path: Path to config file (not used)
        :raises ValidationError: Always, since external config loading is disabled
        """
        raise ValidationError("Loading external configuration files is not supported. "
                              "Use command line arguments or set() method instead.")

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value with validation.

        :param key: Configuration key
        :param value: Configuration value
        :raises ValidationError: If key is unknown or value is invalid
        """
        if key not in self.schema:
            raise ValidationError(f"Unknown configuration key: {key}")
        self.config_data[key] = self._validate_value(key, value, self.schema[key])

    def _validate_value(self, key: str, value: Any, spec: Dict[str, Any]) -> Any:
        """
        Validate a configuration value against its schema specification.

        :param key: Configuration key name
        :param value: Value to validate
        :param spec: Schema specification for the key
        :return: Validated and converted value
        :raises ValidationError: If validation fails
        """
        if value is None:
            return None

        expected_type = spec['type']

        try:
            if expected_type == 'str':
                converted_value = str(value)
            elif expected_type == 'int':
                converted_value = int(value)
            elif expected_type == 'bool':
                if isinstance(value, str):
                    converted_value = value.lower() in ('true', 'yes', '1', 'on')
                else:
                    converted_value = bool(value)
            elif expected_type == 'Path':
                converted_value = Path(value)
            else:
                raise ValidationError(f"Unknown type '{expected_type}' for key '{key}'")

        except (ValueError, TypeError) as e:
            raise ValidationError(f"Cannot convert value '{value}' to type '{expected_type}' "
                                  f"for key '{key}': {e}")

        if 'choices' in spec and converted_value not in spec['choices']:
            raise ValidationError(f"Invalid value '{converted_value}' for key '{key}'. "
                                  f"Valid choices: {spec['choices']}")

        return converted_value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        :param key: Configuration key
        :param default: Default value if key not found or unset
        :return: Configuration value
        """
        value = self.config_data.get(key)
        return default if value is None else value

    def populate_argparse(self, parser: argparse.ArgumentParser) -> None:
        """
        Populate an argparse parser with arguments from the schema.

        :param parser: ArgumentParser to populate
        """
        for key, spec in self.schema.items():
            self._add_argument(parser, key, spec)

    def _add_argument(self, parser: argparse.ArgumentParser,
                      key: str, spec: Dict[str, Any]) -> None:
        """Add a single argument to the parser."""
        arg_names = [f'--{key.replace("_", "-")}']
        if 'short' in spec:
            arg_names.append(f'-{spec["short"]}')
        kwargs = {
            'help': spec.get('help', f'Set {key}'),
            'dest': key
        }

        if spec['type'] == 'bool':
            kwargs['action'] = 'store_true'
        else:
            kwargs['type'] = self._get_argparse_type(spec['type'])
            if 'default' in spec:
                kwargs['default'] = spec['default']

        if 'choices' in spec:
            kwargs['choices'] = spec['choices']

        parser.add_argument(*arg_names, **kwargs)

    def _get_argparse_type(self, schema_type: str):
        """Convert schema type to argparse type."""
        if schema_type == 'int':
            return int
        elif schema_type == 'Path':
            return Path
        else:
            return str

    def update_from_args(self, args: argparse.Namespace) -> None:
        """
        Update configuration from parsed command line arguments.

        :param args: Parsed arguments from argparse
        """
        for key in self.schema.keys():
            if hasattr(args, key) and getattr(args, key) is not None:
                self.set(key, getattr(args, key))
