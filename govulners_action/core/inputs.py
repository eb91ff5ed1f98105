"""Input validation: raw action inputs to a canonical scan request."""

from typing import Optional, Tuple

from ..config import ActionInputs
from ..errors import ConfigurationError
from ..models.scan_request import (
    OutputFormat,
    RegistryCredentials,
    ScanRequest,
    ScanSource,
    Severity,
    SourceKind,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

# YAML 1.2 core schema booleans
TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")

CREDENTIALS_WARNING = "registry-username and registry-password must be specified together"


def _multiple_defined(*values: str) -> bool:
    return sum(1 for value in values if value) > 1


def resolve_source(image: str = "", path: str = "", sbom: str = "") -> ScanSource:
    """
    Pick the scan target from the three mutually exclusive inputs.

    Args:
        image: Container image reference
        path: Directory to scan
        sbom: SBOM file to scan

    Returns:
        ScanSource; a directory source for ``.`` when nothing is set

    Raises:
        ConfigurationError: If more than one input is set
    """
    if _multiple_defined(image, path, sbom):
        raise ConfigurationError(
            "The following options are mutually exclusive: image, path, sbom"
        )

    if image:
        return ScanSource(SourceKind.IMAGE, image)
    if sbom:
        return ScanSource(SourceKind.SBOM, sbom)
    return ScanSource(SourceKind.DIRECTORY, path or ".")


def validate_severity(value: str) -> Optional[Severity]:
    """
    Validate a severity cutoff.

    Returns:
        The matching Severity, or None for an empty cutoff

    Raises:
        ConfigurationError: If the value is not a known level
    """
    if not value:
        return None
    try:
        return Severity(value.lower())
    except ValueError:
        raise ConfigurationError(
            f"Invalid severity-cutoff value is set to {value} - please ensure you are "
            f"choosing either {', '.join(Severity.names())}"
        ) from None


def validate_output_format(value: str) -> OutputFormat:
    """
    Validate an output format.

    Raises:
        ConfigurationError: If the value is not a known format
    """
    try:
        return OutputFormat(value.lower())
    except ValueError:
        raise ConfigurationError(
            f"Invalid output-format value is set to {value} - please ensure you are "
            f"choosing either {', '.join(OutputFormat.names())}"
        ) from None


def parse_bool(name: str, value: str, default: bool = False) -> bool:
    """
    Parse a boolean input.

    Args:
        name: Input name, used in the error message
        value: Raw value
        default: Result for an empty value

    Raises:
        ConfigurationError: If the value is not a boolean
    """
    if not value:
        return default
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def resolve_credentials(
    username: str, password: str
) -> Tuple[Optional[RegistryCredentials], Optional[str]]:
    """
    Pair registry credentials.

    Returns:
        Tuple of (credentials, warning). Credentials are only returned when
        both halves are set; a half-configured pair yields a warning instead.
    """
    if username and password:
        return RegistryCredentials(username, password), None
    if username or password:
        return None, CREDENTIALS_WARNING
    return None, None


def build_request(inputs: ActionInputs) -> ScanRequest:
    """
    Validate raw inputs into a ScanRequest.

    Every check runs here, before anything is downloaded or started.

    Args:
        inputs: Raw action inputs

    Returns:
        Immutable ScanRequest

    Raises:
        ConfigurationError: On any invalid or contradictory input
    """
    source = resolve_source(inputs.image, inputs.path, inputs.sbom)
    severity = validate_severity(inputs.severity_cutoff)
    output_format = validate_output_format(inputs.output_format)
    credentials, warning = resolve_credentials(
        inputs.registry_username, inputs.registry_password
    )

    request = ScanRequest(
        source=source,
        fail_build=parse_bool("fail-build", inputs.fail_build, default=True),
        output_format=output_format,
        severity_cutoff=severity,
        only_fixed=parse_bool("only-fixed", inputs.only_fixed),
        add_cpes_if_none=parse_bool("add-cpes-if-none", inputs.add_cpes_if_none),
        registry_credentials=credentials,
        registry_warning=warning,
    )
    for key, value in request.describe().items():
        logger.debug(f"{key}: {value}")
    return request
