"""Pipeline execution modules for the match engine."""

from .runner import MatchJobRunner, MatchJobResult
from .control import PipelineController, PipelineLockedError

__all__ = ['MatchJobRunner', 'MatchJobResult', 'PipelineController', 'PipelineLockedError']
