"""NVIDIA GPU metrics collector.

Runs nvidia-smi once per scrape, parses its CSV output and maps every row
onto the fixed metric catalog.
"""
import logging
import subprocess
from typing import List, Optional

from collectors.base import BaseCollector
from collectors.errors import InvocationError, MappingError, ParseError
from logging_config import get_logger
from metrics.catalog import NVIDIA_SMI_FORMAT, NVIDIA_SMI_QUERY
from metrics.mapper import map_record
from metrics.models import GpuScrape
from metrics.parser import parse_records


logger = get_logger(__name__)


class NvidiaSmiCollector(BaseCollector):
    """Collect per-GPU metrics using the nvidia-smi query interface"""

    def __init__(self, config=None):
        super().__init__(config, "nvidia_smi", "NVIDIA GPU metrics from nvidia-smi")
        self.command = getattr(config, 'nvidia_smi_command', "nvidia-smi")
        self.timeout = getattr(config, 'nvidia_smi_timeout', 10.0)
        self.skip_malformed_rows = getattr(config, 'skip_malformed_rows', False)

    def build_command(self) -> List[str]:
        return [
            self.command,
            f"--query-gpu={','.join(NVIDIA_SMI_QUERY)}",
            f"--format={NVIDIA_SMI_FORMAT}",
        ]

    def _effective_timeout(self) -> Optional[float]:
        return self.timeout if self.timeout else None

    def invoke(self) -> bytes:
        """Run nvidia-smi and return its raw stdout"""
        cmd = self.build_command()

        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self._effective_timeout())
        except subprocess.TimeoutExpired as e:
            raise InvocationError(f"{self.command} timed out after {e.timeout} seconds") from e
        except OSError as e:
            raise InvocationError(f"Failed to execute {self.command}: {e}") from e

        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        if stderr:
            logger.debug("nvidia-smi stderr", stderr=stderr)

        if result.returncode != 0:
            raise InvocationError(
                f"{self.command} exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=stderr,
            )

        if logging.getLogger(__name__).isEnabledFor(logging.DEBUG):
            logger.debug("nvidia-smi stdout", stdout=result.stdout.decode("utf-8", errors="replace"))
        return result.stdout

    def collect(self) -> GpuScrape:
        """Invoke, parse and map in one pass.

        Raises the first ParseError or MappingError unless malformed rows are
        being skipped, in which case they are logged and kept on the result.
        """
        raw = self.invoke()
        scrape = GpuScrape()

        for item in parse_records(raw):
            try:
                if isinstance(item, ParseError):
                    raise item
                scrape.samples.append(map_record(item))
            except (ParseError, MappingError) as e:
                if not self.skip_malformed_rows:
                    raise
                logger.warning(
                    "Skipping malformed nvidia-smi row",
                    error=str(e),
                    stage=e.stage,
                    line_number=e.line_number,
                )
                scrape.skipped.append(e)

        return scrape
