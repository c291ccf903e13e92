# src/blockscope/model.py
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ChildSignature(str, Enum):
    """Primary content category of one direct child element."""
    IMAGE = "image"
    HEADING = "heading"
    TEXT = "text"
    LINK = "link"
    LIST = "list"
    MEDIA = "media"
    CONTAINER = "container"
    MIXED = "mixed"


class LayoutPattern(str, Enum):
    """
    Closed classification of a region's structure.
    TABS, CARDS, CAROUSEL and TEXT only exist in the naming table;
    the detector never produces them.
    """
    SINGLE_IMAGE = "single-image"
    LIST = "list"
    HERO = "hero"
    GRID = "grid"
    MEDIA_TEXT = "media-text"
    COLUMNS = "columns"
    ACCORDION = "accordion"
    TEXT_ONLY = "text-only"
    UNKNOWN = "unknown"
    TABS = "tabs"
    CARDS = "cards"
    CAROUSEL = "carousel"
    TEXT = "text"


class BlockType(str, Enum):
    """Block type declared by the vision collaborator alongside the hints."""
    HERO = "hero"
    CARDS = "cards"
    CAROUSEL = "carousel"
    COLUMNS = "columns"
    TABS = "tabs"
    ACCORDION = "accordion"
    FORM = "form"
    CONTENT = "content"
    OTHER = "other"


class HintPosition(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class LayoutStructure(BaseModel):
    """
    Structure summary of a node's direct children.
    row_count always equals the number of direct children and
    child_signatures[i] describes child i in document order.
    """
    model_config = ConfigDict(frozen=True)

    row_count: int
    column_count: int
    has_images: bool
    has_headings: bool
    has_links: bool
    has_list: bool
    child_signatures: Tuple[ChildSignature, ...]
    is_repeating: bool


class LayoutAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    pattern: LayoutPattern
    block_name: str
    structure: LayoutStructure


class BlockMetadata(BaseModel):
    """Summary handed to the template generator together with the analysis."""
    model_config = ConfigDict(frozen=True)

    element_count: int
    has_images: bool
    has_headings: bool
    has_links: bool
    row_count: int
    column_count: int


class ContentHints(BaseModel):
    """
    Description of an expected region, as produced by the vision collaborator.
    Accepts both the collaborator's camelCase keys and snake_case field names.
    """
    model_config = ConfigDict(frozen=True)

    headings: Tuple[str, ...] = ()
    has_images: bool = Field(False, validation_alias=AliasChoices("hasImages", "has_images"))
    image_count: Optional[int] = Field(None, validation_alias=AliasChoices("imageCount", "image_count"))
    has_cards: bool = Field(False, validation_alias=AliasChoices("hasCards", "has_cards"))
    card_count: Optional[int] = Field(None, validation_alias=AliasChoices("cardCount", "card_count"))
    position: HintPosition = HintPosition.MIDDLE

    @field_validator("headings", mode="before")
    @classmethod
    def drop_missing_headings(cls, v):
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v


class DescribedBlock(BaseModel):
    """One content block as described from a screenshot."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    type: BlockType = BlockType.OTHER
    content_hints: ContentHints = Field(
        default_factory=ContentHints,
        validation_alias=AliasChoices("contentHints", "content_hints"),
    )

    @field_validator("type", mode="before")
    @classmethod
    def unknown_type_as_other(cls, v):
        if isinstance(v, str) and v not in {t.value for t in BlockType}:
            return BlockType.OTHER
        return v


class MatchResult(BaseModel):
    """selector is None when no candidate cleared the acceptance threshold."""
    model_config = ConfigDict(frozen=True)

    selector: Optional[str] = None
    sibling_selectors: Optional[Tuple[str, ...]] = None

    @property
    def found(self) -> bool:
        return self.selector is not None


class NamedBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    selector: str
    name: str
    description: str
    type: BlockType
    priority: str
    sibling_selectors: Optional[Tuple[str, ...]] = None


class ExtractedContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    outer_html: str
    inner_html: str
    tag_name: str
    class_name: str
    child_count: int
