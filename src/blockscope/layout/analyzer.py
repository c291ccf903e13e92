# src/blockscope/layout/analyzer.py
import logging

from .naming import generate_block_name
from .patterns import detect_pattern
from .structure import analyze_structure
from ..dom.tree import Node
from ..exceptions import AnalysisFailed, BlockGeneratorError
from ..model import BlockMetadata, LayoutAnalysis

logger = logging.getLogger(__name__)


def analyze_layout(node: Node) -> LayoutAnalysis:
    """
    Analyzes the layout of a region and picks its block pattern and name.

    Args:
        node (Node): The region's root element.

    Returns:
        LayoutAnalysis: Pattern, derived block name and the structure summary.

    Raises:
        AnalysisFailed: On any unexpected error inside the analysis. Errors that
                        already belong to the BlockGeneratorError family propagate unchanged.
    """
    try:
        structure = analyze_structure(node)
        pattern = detect_pattern(structure, node)
        block_name = generate_block_name(pattern, structure)
    except BlockGeneratorError:
        raise
    except Exception as e:
        logger.error("Layout analysis of %r failed: %s", node, e, exc_info=True)
        raise AnalysisFailed(f"Layout analysis failed: {e}") from e

    logger.debug("Analyzed %r as %s (%s).", node, pattern.value, block_name)
    return LayoutAnalysis(pattern=pattern, block_name=block_name, structure=structure)


def build_metadata(node: Node, analysis: LayoutAnalysis) -> BlockMetadata:
    """Summarizes an analysis for the block template generator."""
    structure = analysis.structure
    return BlockMetadata(
        element_count=len(node.select('*')),
        has_images=structure.has_images,
        has_headings=structure.has_headings,
        has_links=structure.has_links,
        row_count=structure.row_count,
        column_count=structure.column_count,
    )
