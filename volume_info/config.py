"""
Configuration module - Report settings read from the environment.

Environment variables are read once at startup and passed along explicitly.
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

MOUNT_POINT = "/volume"

OUTPUT_FILE_INFOS_VAR = "OUTPUT_FILE_INFOS"
ALL_TIMES_VAR = "ALL_TIMES"


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name) == "true"


class ReportConfig(BaseModel):
    """Settings controlling which fields the report contains."""
    output_file_infos: bool = Field(False, description="Include the per-entry fileInfos list")
    all_times: bool = Field(False, description="Include lastChange and lastBirth")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReportConfig":
        """
        Load settings from environment variables.

        A flag is enabled only when its variable is exactly "true".

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            ReportConfig
        """
        if environ is None:
            environ = os.environ
        return cls(
            output_file_infos=_flag(environ, OUTPUT_FILE_INFOS_VAR),
            all_times=_flag(environ, ALL_TIMES_VAR),
        )
