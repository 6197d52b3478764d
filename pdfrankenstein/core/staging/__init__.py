"""
Per-session staging area for intermediate files.
"""
from .staging_dir import StagingDirectory

__all__ = ["StagingDirectory"]
