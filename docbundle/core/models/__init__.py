"""
Domain models — Pydantic types for docbundle.

All models are re-exported here for convenient access:

    from docbundle.core.models import BuildSpec, BuildsConfig, Workspace
"""

from docbundle.core.models.build import BuildsConfig, BuildSpec
from docbundle.core.models.workspace import Workspace

__all__ = [
    # build.py
    "BuildSpec",
    "BuildsConfig",
    # workspace.py
    "Workspace",
]
