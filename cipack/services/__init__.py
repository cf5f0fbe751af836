"""Pipeline services."""

from .pipeline import CheckPipeline, ReleaseArtifacts, ReleasePipeline
from .pipeline_errors import PipelineError

__all__ = [
    "CheckPipeline",
    "PipelineError",
    "ReleaseArtifacts",
    "ReleasePipeline",
]
