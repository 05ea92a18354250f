"""Component shapes stored in an article's ``blocks`` dynamic zone.

Each entry is a dict tagged by ``__component`` (e.g. ``"shared.code-block"``).
"""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

class Component(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None

class MediaRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = None
    url: str
    alternative_text: Optional[str] = Field(default=None, alias="alternativeText")

class CodeBlock(Component):
    component: Literal["shared.code-block"] = Field(default="shared.code-block", alias="__component")
    # Unset fields may arrive as null; the renderer treats null as empty
    code: Optional[str] = ""
    # Passed through to the highlighter class, e.g. "python"
    language: Optional[str] = "javascript"
    filename: Optional[str] = None
    show_line_numbers: Optional[bool] = Field(default=True, alias="showLineNumbers")

class Quote(Component):
    component: Literal["shared.quote"] = Field(default="shared.quote", alias="__component")
    title: Optional[str] = None
    body: Optional[str] = None

class RichText(Component):
    component: Literal["shared.rich-text"] = Field(default="shared.rich-text", alias="__component")
    body: Optional[str] = None

class Seo(Component):
    component: Literal["shared.seo"] = Field(default="shared.seo", alias="__component")
    meta_title: str = Field(alias="metaTitle")
    meta_description: str = Field(alias="metaDescription")
    share_image: Optional[MediaRef] = Field(default=None, alias="shareImage")

class MediaBlock(Component):
    component: Literal["shared.media"] = Field(default="shared.media", alias="__component")
    file: Optional[MediaRef] = None

class Slider(Component):
    component: Literal["shared.slider"] = Field(default="shared.slider", alias="__component")
    files: list[MediaRef] = Field(default_factory=list)

class Achievement(Component):
    component: Literal["about.achievement"] = Field(default="about.achievement", alias="__component")
    title: str
    description: str
    date: dt.date

class Education(Component):
    component: Literal["about.education"] = Field(default="about.education", alias="__component")
    institution: str
    degree: str
    description: Optional[str] = None
    start_date: dt.date = Field(alias="startDate")
    end_date: Optional[dt.date] = Field(default=None, alias="endDate")

class Experience(Component):
    component: Literal["about.experience"] = Field(default="about.experience", alias="__component")
    company: str
    position: str
    description: str
    current: bool = False
    start_date: dt.date = Field(alias="startDate")
    end_date: Optional[dt.date] = Field(default=None, alias="endDate")

Block = Annotated[
    Union[CodeBlock, Quote, RichText, Seo, MediaBlock, Slider, Achievement, Education, Experience],
    Field(discriminator="component"),
]

_block_adapter = TypeAdapter(Block)

def parse_block(raw: dict) -> Block:
    """Validate one dynamic-zone entry. Raises ``pydantic.ValidationError`` on bad input."""
    return _block_adapter.validate_python(raw)
