"""Human-readable document numbers derived from counter values."""

from pydantic import BaseModel, Field, computed_field


class DocumentNumber(BaseModel):
    """A document number such as MO00042 or CO00042ACME.

    Derived from a counter value, never stored as the source of truth.
    """

    prefix: str = Field(..., description="Counter key used as prefix, e.g. MO")
    sequence: int = Field(..., description="Allocated sequence value", ge=0)
    width: int = Field(5, description="Zero-pad width of the sequence", ge=1)
    affix: str = Field("", description="Optional customer affix appended after the sequence")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted(self) -> str:
        """Display string; sequences wider than `width` are not truncated."""
        return f"{self.prefix}{self.sequence:0{self.width}d}{self.affix}"
