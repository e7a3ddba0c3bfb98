"""
Build pipeline entry points.
"""

from .builder import BuildReport, RenderedPage, build, clean
from .errors import RenderFailure, SiteBuildError, SourceMissing, WriteFailure

__all__ = [
    "BuildReport",
    "RenderedPage",
    "RenderFailure",
    "SiteBuildError",
    "SourceMissing",
    "WriteFailure",
    "build",
    "clean",
]
