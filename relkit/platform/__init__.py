"""Subprocess and filesystem helpers."""

from relkit.platform.files import replace_lines
from relkit.platform.process import ProcessError, run, run_streaming

__all__ = ["ProcessError", "replace_lines", "run", "run_streaming"]
