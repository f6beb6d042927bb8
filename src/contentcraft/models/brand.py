"""Brand profile model — the "brand DNA" extracted from sample content."""

from __future__ import annotations

from pydantic import BaseModel, Field


class VoiceProfile(BaseModel):
    tone: str
    values: list[str] = Field(default_factory=list)
    language_style: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class VisualIdentity(BaseModel):
    color_palette: list[str] = Field(default_factory=list)
    font_preferences: list[str] = Field(default_factory=list)
    imagery_style: str = ""


class ContentPatterns(BaseModel):
    common_themes: list[str] = Field(default_factory=list)
    preferred_formats: list[str] = Field(default_factory=list)
    negative_keywords: list[str] = Field(default_factory=list)


class BrandProfile(BaseModel):
    voice_profile: VoiceProfile
    visual_identity: VisualIdentity | None = None
    content_patterns: ContentPatterns = Field(default_factory=ContentPatterns)
    summary: str = ""
