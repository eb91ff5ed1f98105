"""Action inputs: environment plumbing and action metadata defaults."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .utils.logging import get_logger

logger = get_logger(__name__)

TOOL_NAME = "govulners"
DEFAULT_GOVULNERS_VERSION = "v0.65.1"
INSTALLER_URL = "https://raw.githubusercontent.com/nextlinux/govulners/main/install.sh"

# Mirrors the defaults declared in action.yml
DEFAULT_INPUTS: Dict[str, str] = {
    "fail-build": "true",
    "output-format": "sarif",
    "severity-cutoff": "medium",
    "only-fixed": "false",
    "add-cpes-if-none": "false",
    "govulners-version": DEFAULT_GOVULNERS_VERSION,
}


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read a raw action input.

    Args:
        name: Input name as declared in action.yml (e.g. ``fail-build``)
        environ: Environment to read from (defaults to ``os.environ``)

    Returns:
        Stripped value, or an empty string when unset
    """
    environ = os.environ if environ is None else environ
    return environ.get(input_env_name(name), "").strip()


def default_metadata_path(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Locate action.yml next to the checked-out action, if any."""
    environ = os.environ if environ is None else environ
    action_path = environ.get("GITHUB_ACTION_PATH")
    if action_path:
        return Path(action_path) / "action.yml"
    return None


def load_action_defaults(path: Optional[Path] = None) -> Dict[str, str]:
    """
    Load input defaults from action metadata.

    Args:
        path: Path to action.yml; built-in defaults are used when missing

    Returns:
        Mapping of input name to default value
    """
    defaults = dict(DEFAULT_INPUTS)
    if path is None or not Path(path).is_file():
        return defaults

    try:
        with open(path, encoding="utf-8") as f:
            metadata = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid action metadata in {path}: {e}") from e

    inputs = metadata.get("inputs") if isinstance(metadata, dict) else None
    if inputs is None:
        inputs = {}
    if not isinstance(inputs, dict):
        raise ConfigurationError(f"Invalid action metadata in {path}: 'inputs' must be a mapping")

    for name, spec in inputs.items():
        if isinstance(spec, dict) and spec.get("default") is not None:
            value = spec["default"]
            if isinstance(value, bool):
                value = "true" if value else "false"
            defaults[name] = str(value)

    logger.debug(f"Loaded action defaults from {path}")
    return defaults


@dataclass
class ActionInputs:
    """Raw, unvalidated input strings for one invocation."""
    image: str = ""
    path: str = ""
    sbom: str = ""
    fail_build: str = DEFAULT_INPUTS["fail-build"]
    output_format: str = DEFAULT_INPUTS["output-format"]
    severity_cutoff: str = DEFAULT_INPUTS["severity-cutoff"]
    only_fixed: str = DEFAULT_INPUTS["only-fixed"]
    add_cpes_if_none: str = DEFAULT_INPUTS["add-cpes-if-none"]
    registry_username: str = ""
    registry_password: str = field(default="", repr=False)
    govulners_version: str = DEFAULT_GOVULNERS_VERSION

    @staticmethod
    def input_name(field_name: str) -> str:
        """Action input name for a field (``fail_build`` -> ``fail-build``)."""
        return field_name.replace("_", "-")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, Optional[str]]] = None,
        metadata_path: Optional[Path] = None,
    ) -> "ActionInputs":
        """
        Build inputs from explicit overrides, ``INPUT_*`` variables and defaults.

        Precedence: overrides (any value that is not None, including an
        empty string), then non-empty environment inputs, then action
        metadata defaults.

        Args:
            environ: Environment to read from (defaults to ``os.environ``)
            overrides: Values keyed by field name, typically from the CLI
            metadata_path: action.yml to read defaults from

        Returns:
            ActionInputs instance
        """
        environ = os.environ if environ is None else environ
        overrides = overrides or {}
        if metadata_path is None:
            metadata_path = default_metadata_path(environ)
        defaults = load_action_defaults(metadata_path)

        values = {}
        for f in fields(cls):
            name = cls.input_name(f.name)
            override = overrides.get(f.name)
            if override is not None:
                values[f.name] = override.strip()
                continue
            values[f.name] = get_input(name, environ) or defaults.get(name, "")
        return cls(**values)

