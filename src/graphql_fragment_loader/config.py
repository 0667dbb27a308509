"""Configuration models for the GraphQL fragment loader."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"
    GRAPHQL = "graphql"


class DanglingReferencePolicy(str, Enum):
    """What to do with a spread that names a fragment missing from the document."""

    IGNORE = "ignore"
    WARN = "warn"


class LoaderConfig(BaseModel):
    """Main configuration for loading and compiling documents."""

    import_marker: str = Field(
        "#", min_length=1, description="Comment marker that introduces an import directive"
    )
    dangling_references: DanglingReferencePolicy = Field(
        DanglingReferencePolicy.IGNORE,
        description="Report spreads of fragments that cannot be resolved",
    )
    extensions: list[str] = Field(
        default_factory=lambda: [".graphql", ".gql"],
        description="File extensions treated as GraphQL sources",
    )
    encoding: str = Field("utf-8", description="Encoding used to read source files")
