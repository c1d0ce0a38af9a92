"""Result models handed to the prompt-building and UI layers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ImageSource = Literal["auto", "manual"]
ColorSource = Literal["css", "ai", "fill", "img", "logo"]
LinkCategory = Literal["navigation", "content", "footer", "other"]


class ScrapedImage(BaseModel):
    """A candidate image discovered on the page.

    ``width`` and ``height`` are the declared attribute values (0 when
    missing), never measured pixels.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    score: float = Field(ge=0.0, le=1.0)
    width: int = 0
    height: int = 0
    alt: str = ""
    source: ImageSource = "auto"
    is_logo: bool = Field(default=False, alias="isLogo")


class ColorPaletteEntry(BaseModel):
    hex: str = Field(pattern=r"^#[0-9A-F]{6}$")
    source: ColorSource
    role_hint: str = ""


class HeadlineSet(BaseModel):
    h1: list[str] = []
    h2: list[str] = []
    h3: list[str] = []
    h4: list[str] = []


class StructuredContext(BaseModel):
    summary: str = ""
    benefits: list[str] = []
    target: str = ""
    headlines_raw: HeadlineSet = HeadlineSet()
    keywords_top: list[str] = []
    entities: list[str] = []


class AnalysisInput(BaseModel):
    """Page facts forwarded to the external analysis step."""

    url: str
    title: str = ""
    description: str = ""
    main_content: str = ""
    headlines: HeadlineSet = HeadlineSet()
    extracted_colors: list[str] = []


class ExtractedLink(BaseModel):
    url: str
    text: str
    category: LinkCategory = "other"
    is_internal: bool = True


class ExtractionResult(BaseModel):
    url: str
    context: StructuredContext
    images: list[ScrapedImage] = []
    colors: list[ColorPaletteEntry] = []
    palette: list[ColorPaletteEntry] = []
    analysis_input: AnalysisInput
    timing: dict[str, int] = {}
