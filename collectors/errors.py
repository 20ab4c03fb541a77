"""GPU pipeline error types"""
from typing import Optional


class GpuPipelineError(Exception):
    """Base class for failures while turning nvidia-smi output into metrics"""

    stage = "pipeline"


class InvocationError(GpuPipelineError):
    """nvidia-smi could not be started, timed out or exited abnormally"""

    stage = "invoke"

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ParseError(GpuPipelineError):
    """A single CSV row could not be parsed"""

    stage = "parse"

    def __init__(self, line_number: int, line: str, reason: str):
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class MappingError(GpuPipelineError):
    """A parsed row lacks the GPU name or index"""

    stage = "map"

    def __init__(self, line_number: int, field_count: int):
        super().__init__(
            f"line {line_number}: expected at least 2 fields (name, index), got {field_count}"
        )
        self.line_number = line_number
        self.field_count = field_count
