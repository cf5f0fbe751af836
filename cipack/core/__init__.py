"""Core domain types and logic."""

from .config import (
    ConfigError,
    FileConfig,
    Overrides,
    PipelineConfig,
    load_config,
    resolve_pipeline_config,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .workspace import Project, ProjectError, resolve_project

__all__ = [
    # config
    "ConfigError",
    "FileConfig",
    "Overrides",
    "PipelineConfig",
    "load_config",
    "resolve_pipeline_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # workspace
    "Project",
    "ProjectError",
    "resolve_project",
]
