# src/blockscope/dom/core.py
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    """
    Rendered geometry of an element.
    `y` is the document-absolute top offset (viewport top plus scroll offset).
    """
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def bottom(self) -> float:
        return self.y + self.height


class ElementRecord(BaseModel):
    """
    One arena slot of the tree: the element's own data plus index references
    to its parent and children. Records are never mutated after the build.
    """
    model_config = ConfigDict(frozen=True)

    index: int
    tag: str
    attrs: Dict[str, str] = Field(default_factory=dict)
    classes: Tuple[str, ...] = ()
    parent: Optional[int] = None
    children: Tuple[int, ...] = ()
    bbox: Optional[BoundingBox] = None

    @property
    def element_id(self) -> str:
        return self.attrs.get("id", "")
