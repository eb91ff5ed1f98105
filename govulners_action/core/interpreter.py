"""Result interpretation: persist reports and decide the build status."""

from pathlib import Path
from typing import Dict, Optional, Tuple

from ..config import TOOL_NAME
from ..models.scan_outcome import BuildStatus, ScanOutcome
from ..models.scan_request import OutputFormat, ScanRequest
from ..utils.logging import get_logger

logger = get_logger(__name__)

REPORT_FILES = {
    OutputFormat.SARIF: "results.sarif",
    OutputFormat.JSON: "results.json",
}


def severity_message(severity: str) -> str:
    return (
        f"Failed minimum severity level. Found vulnerabilities with level "
        f"'{severity}' or higher"
    )


class ResultInterpreter:
    """Turns a ScanOutcome into report files and a build status."""

    def __init__(self, output_dir: str = ".", debug: bool = False):
        """
        Initialize interpreter.

        Args:
            output_dir: Directory the report files are written to
            debug: Also log the captured report at debug level
        """
        self.output_dir = Path(output_dir)
        self.debug = debug

    def report_path(self, output_format: OutputFormat) -> Optional[Path]:
        """Where a format's report is written, or None for log-only formats."""
        name = REPORT_FILES.get(output_format)
        if name is None:
            return None
        return self.output_dir / name

    def persist(self, outcome: ScanOutcome, request: ScanRequest) -> Dict[str, str]:
        """
        Write the captured report.

        Args:
            outcome: Scanner outcome; its ``report_paths`` is updated
            request: Scan request

        Returns:
            Outputs mapping, e.g. ``{"sarif": "./results.sarif"}``
        """
        if self.debug:
            logger.debug(f"{TOOL_NAME} output:")
            logger.debug(outcome.text)

        output_format = request.output_format
        path = self.report_path(output_format)
        if path is None:
            logger.info(outcome.text)
            return {}

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(outcome.captured_output)
        outcome.report_paths[output_format.value] = str(path)
        logger.debug(f"Wrote {output_format.value} report to {path}")
        return {output_format.value: str(path)}

    def evaluate(self, outcome: ScanOutcome, request: ScanRequest) -> BuildStatus:
        """
        Map the scanner exit code to a build status.

        Any non-zero code, including negative codes from signal termination,
        takes the failure path.
        """
        if outcome.exit_code == 0:
            return BuildStatus.passed()

        if request.severity_cutoff is None:
            # Not a severity gate failure, so govulners itself had a problem
            message = f"{TOOL_NAME} had a non-zero exit status when running"
            logger.warning(message)
            return BuildStatus.warning(message)

        message = severity_message(request.severity_cutoff.value)
        if request.fail_build:
            return BuildStatus.failure(message)

        logger.warning(message)
        return BuildStatus.warning(message)

    def interpret(
        self, outcome: ScanOutcome, request: ScanRequest
    ) -> Tuple[Dict[str, str], BuildStatus]:
        """
        Persist reports, then evaluate the exit code.

        Reports are always written first so they are available even when
        the build fails.

        Returns:
            Tuple of (outputs, build status)
        """
        outputs = self.persist(outcome, request)
        return outputs, self.evaluate(outcome, request)
