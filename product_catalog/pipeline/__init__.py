"""
Before/after stage pipeline wrapping every handler call.
"""

from .base import Handler, Stage, StagePipeline
from .stages import IdentityRequiredStage, RequestContextStage, ResponseShapingStage

__all__ = [
    "Handler",
    "IdentityRequiredStage",
    "RequestContextStage",
    "ResponseShapingStage",
    "Stage",
    "StagePipeline",
]
