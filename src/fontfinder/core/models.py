"""Pydantic models for search requests and results."""

from pydantic import BaseModel, Field, field_validator


class SearchQuery(BaseModel):
    """Request for a font family, optionally narrowed to some styles."""

    family: str = Field(..., min_length=1, description="Exact family name")
    style: str | list[str] | None = Field(
        None, description="Style name or list of style names; None means all styles"
    )

    @field_validator("style")
    @classmethod
    def empty_style_means_all(cls, v: str | list[str] | None) -> str | list[str] | None:
        # An empty style string requests every style, like an absent one
        if isinstance(v, str) and not v:
            return None
        return v

    @property
    def styles(self) -> list[str] | None:
        """Requested styles as a list, or None for all styles."""
        if self.style is None:
            return None
        if isinstance(self.style, str):
            return [self.style]
        return list(self.style)


class ResolvedFont(BaseModel):
    """A requested family/style pair that exists in the index."""

    family: str
    style: str
    file: str
    path: str | None = Field(None, description="Source file of an install request")


class MissingFont(BaseModel):
    """A requested family (and style) that the index does not have."""

    family: str
    style: str | None = None
    path: str | None = Field(None, description="Source file of an install request")


class SearchResult(BaseModel):
    """Found and missing fonts for a batch of queries."""

    found: list[ResolvedFont] = Field(default_factory=list)
    missing: list[MissingFont] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


class InstallOutcome(BaseModel):
    """Result of installing a set of font files."""

    success: bool
    found: list[ResolvedFont] = Field(
        default_factory=list, description="Fonts that were already installed"
    )
    missing: list[MissingFont] = Field(
        default_factory=list, description="Fonts still missing after installation"
    )
    installed: list[ResolvedFont] = Field(
        default_factory=list, description="Fonts found after installation"
    )
    installed_count: int = Field(0, ge=0, description="Files copied into the font directory")
    unreadable: list[str] = Field(
        default_factory=list, description="Source files whose name table could not be read"
    )

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
