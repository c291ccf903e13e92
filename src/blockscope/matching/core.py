# src/blockscope/matching/core.py
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..dom.tree import Node
from ..model import BlockType, ContentHints
from ..utils.config_manager import config_manager


def scoring_rule(label: str):
    """
    Decorator naming the adjustment a scoring rule contributes.
    The label shows up in debug logs of the score breakdown.
    """
    def decorator(func):
        func.rule_label = label
        return func
    return decorator


@dataclass(frozen=True)
class MatchSettings:
    """Thresholds of the scoring function, read from the `matching` config section."""
    min_width: float = 300
    min_height: float = 80
    max_page_fraction: float = 0.9
    min_score: float = 30

    @classmethod
    def from_config(cls) -> "MatchSettings":
        return cls(
            min_width=config_manager.get_nested("matching.min_width", cls.min_width),
            min_height=config_manager.get_nested("matching.min_height", cls.min_height),
            max_page_fraction=config_manager.get_nested("matching.max_page_fraction", cls.max_page_fraction),
            min_score=config_manager.get_nested("matching.min_score", cls.min_score),
        )


@dataclass(frozen=True)
class ScoringContext:
    """Everything a scoring rule may look at for one candidate."""
    node: Node
    hints: ContentHints
    block_type: BlockType
    page_height: float
    settings: MatchSettings


# A rule returns a signed score adjustment (0 when it does not apply)
ScoringRule = Callable[[ScoringContext], float]


class BlockTypeDefinition:
    """
    Configuration object binding a block type to its candidate search
    expressions, its class-name keywords and its type-specific scoring rules.
    """

    def __init__(
            self,
            block_type: BlockType,
            search_selectors: Sequence[str],
            keywords: Sequence[str] = (),
            scoring_rules: Optional[List[ScoringRule]] = None,
    ):
        self.block_type = block_type
        self.search_selectors: Tuple[str, ...] = tuple(search_selectors)
        self.keywords: Tuple[str, ...] = tuple(keywords)
        self.scoring_rules: Tuple[ScoringRule, ...] = tuple(scoring_rules or [])

    def __repr__(self) -> str:
        return f"<BlockTypeDefinition {self.block_type.value}>"
