"""
Build model — one entry of ``builds.yml``.

A BuildSpec is a declaration: "assemble this project file plus these
common sections into that output, and ship these skills next to it."
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildSpec(BaseModel):
    """A single configured build. Immutable for the duration of a run."""

    model_config = ConfigDict(frozen=True)

    name: str
    project: str
    output: str
    common: list[str] = Field(default_factory=list)
    # None: key absent, skills are not managed for this build.
    skills: list[str] | None = None
    link_to: str | None = None

    @field_validator("common", mode="before")
    @classmethod
    def _null_common(cls, value: object) -> object:
        # "common:" with no entries parses as None
        return [] if value is None else value

    @field_validator("skills")
    @classmethod
    def _plain_skill_names(cls, value: list[str] | None) -> list[str] | None:
        # Each skill is one directory directly under .claude/skills
        for name in value or []:
            if name in ("", ".", "..") or "/" in name or "\\" in name:
                raise ValueError(f"Invalid skill name {name!r}: must be a single directory name")
        return value


class BuildsConfig(BaseModel):
    """Root of ``builds.yml``."""

    builds: list[BuildSpec] = Field(default_factory=list)

    @field_validator("builds", mode="before")
    @classmethod
    def _null_builds(cls, value: object) -> object:
        return [] if value is None else value

    def get_build(self, name: str) -> BuildSpec | None:
        """Look up a build by name."""
        for build in self.builds:
            if build.name == name:
                return build
        return None
