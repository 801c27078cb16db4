"""
Configuration file support for the motifprior CLI.

Supports YAML and JSON config files with CLI argument override.

Example ``prior.yaml``:
```
expression: data/expression.txt
motif: data/motif.txt
ppi: data/ppi.txt
output_dir: results/priors
parameters:
  motif_weight: 0.3
  motif_cutoff: 0.1
  add_corr: 1
  thresh: 0.05
  inc_coverage: 1
```
"""

import json
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from motifprior.core.params import PriorParameters

# Top-level config keys that map straight onto CLI arguments
PATH_KEYS = ('expression', 'motif', 'ppi', 'output_dir', 'chip')
OPTION_KEYS = ('order', 'allow_empty_motif', 'chunk_size')

# Short CLI flags and the argument they set
SHORT_TO_LONG = {
    'e': 'expression',
    'm': 'motif',
    'p': 'ppi',
    'o': 'output_dir',
    'c': 'config',
    'v': 'verbose',
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML or JSON file.

    Parameters:
        config_path: Path to config file (.yaml, .yml, or .json)

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported or invalid

    Examples:
        >>> config = load_config(Path("prior.yaml"))
        >>> print(config['parameters']['add_corr'])
        1
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    try:
        with open(config_path, 'r') as f:
            if suffix in ('.yaml', '.yml'):
                config = yaml.safe_load(f)
            elif suffix == '.json':
                config = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported config format: {suffix}. "
                    f"Use .yaml, .yml, or .json"
                )
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ValueError("Config file must contain a dictionary/mapping at top level")

    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Raises:
        ValueError: If a section has the wrong type, a parameter name is
            unknown, or a parameter value is out of range
    """
    parameters = config.get('parameters', {})
    if parameters is None:
        return
    if not isinstance(parameters, dict):
        raise ValueError("'parameters' must be a mapping of parameter names to values")

    known = set(PriorParameters().to_dict())
    unknown = sorted(set(parameters) - known)
    if unknown:
        raise ValueError(
            f"Unknown parameter(s) in config: {', '.join(unknown)}. "
            f"Valid names: {', '.join(sorted(known))}"
        )

    for name, value in parameters.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(
                f"Parameter '{name}' must be a number, got {type(value).__name__} {value!r}"
            )

    # Range checks live in PriorParameters
    PriorParameters.from_mapping(parameters)


def _explicit_args(cli_args: Optional[List[str]]) -> set:
    """Destinations of the arguments the user typed on the command line."""
    explicit = set()
    for arg in cli_args or []:
        if arg.startswith('--'):
            explicit.add(arg[2:].split('=', 1)[0].replace('-', '_'))
        elif arg.startswith('-') and len(arg) == 2 and arg[1] in SHORT_TO_LONG:
            explicit.add(SHORT_TO_LONG[arg[1]])
    return explicit


def _merge_value(cli_value: Any, config_value: Any, was_explicitly_set: bool) -> Any:
    """
    Merge a single config value with CLI argument.

    Rules:
    - CLI args ALWAYS override config if explicitly set
    - If CLI arg not set, use config value
    - If neither set, keep CLI default
    """
    if was_explicitly_set:
        return cli_value
    if config_value is not None:
        return config_value
    return cli_value


def merge_config_with_args(
    config: Dict[str, Any],
    args: Namespace,
    cli_args: Optional[List[str]] = None,
) -> Namespace:
    """
    Merge config file values with CLI arguments.

    Priority (highest to lowest):
    1. Explicitly provided CLI arguments
    2. Config file values
    3. CLI argument defaults

    Parameters:
        config: Configuration dictionary from load_config()
        args: Parsed CLI arguments (argparse.Namespace)
        cli_args: Raw CLI arguments list (for detecting explicit values)
                  If None, assumes all args are defaults

    Returns:
        Updated Namespace with merged values

    Examples:
        >>> config = load_config(Path("prior.yaml"))
        >>> args = parser.parse_args(["build", "--motif-weight", "0.5"])
        >>> merged = merge_config_with_args(config, args, ["--motif-weight", "0.5"])
        >>> # motif_weight from CLI, everything else from config
    """
    explicit = _explicit_args(cli_args)
    merged = Namespace(**vars(args))

    for key in PATH_KEYS:
        if key in config:
            value = config[key]
            if value is not None:
                value = Path(value)
            setattr(merged, key, _merge_value(getattr(merged, key, None), value, key in explicit))

    for key in OPTION_KEYS:
        if key in config:
            setattr(merged, key, _merge_value(getattr(merged, key, None), config[key], key in explicit))

    for key, value in (config.get('parameters') or {}).items():
        setattr(merged, key, _merge_value(getattr(merged, key, None), value, key in explicit))

    return merged
