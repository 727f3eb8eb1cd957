"""Locating and reading archiexport.yaml.

Sources are tried in order and the first non-empty file wins:

1. the ``--config`` path given on the command line
2. the file named by ``$ARCHIEXPORT_CONFIG``
3. ``archiexport.yaml`` in the working directory
4. ``~/.archiexport/config.yaml``

``${VAR}`` and ``${VAR:-fallback}`` in string values are expanded from the
environment, so output directories can differ per machine.
"""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ArchiExportConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "archiexport.yaml"
CONFIG_ENV_VAR = "ARCHIEXPORT_CONFIG"
USER_CONFIG = Path(".archiexport") / "config.yaml"

_ENV_REF_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = []
    if cli_path:
        paths.append(Path(cli_path))
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path(CONFIG_FILENAME))
    paths.append(Path.home() / USER_CONFIG)
    return paths


def load_config(cli_path: str | None = None) -> ArchiExportConfig:
    """Load the first config found, or defaults when there is none.

    An explicit *cli_path* must exist. Empty files count as "use defaults"
    and the search moves on. Malformed YAML, a non-mapping document or
    out-of-range values raise ``ValueError`` naming the offending file.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            logger.debug("Skipping empty config %s", path)
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping")
        try:
            config = ArchiExportConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        return config

    return ArchiExportConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} and ${VAR:-fallback} references in strings."""
    if isinstance(obj, str):
        return _ENV_REF_RE.sub(lambda m: os.environ.get(m.group(1)) or (m.group(2) or ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `archiexport config init`
DEFAULT_CONFIG_TEMPLATE = f"""\
# {CONFIG_FILENAME}

# Model extraction
extraction:
  default_model_name: "ArchiMate Export"
  cross_layer_inference: true    # link same-named elements across layers
  min_token_length: 4
  # stopwords: [service, system, platform, management]

# draw.io layout
layout:
  node_width: 200
  node_height: 60
  horizontal_gap: 40
  vertical_gap: 30
  max_columns: 5
  label_max_chars: 40
  edge_label_max_chars: 30

# Output
output:
  base_dir: "exports"            # e.g. "${{ARCHIEXPORT_OUT:-exports}}"
  write_combined: true
  write_individual: true
  validation: "strict"         # strict | warn | off

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
