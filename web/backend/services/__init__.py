"""Business logic services."""

from .match_service import MatchService
from .pipeline_service import PipelineService
