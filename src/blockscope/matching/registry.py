# src/blockscope/matching/registry.py
import importlib
import logging
import pkgutil
import threading
from typing import Dict

from .core import BlockTypeDefinition
from ..model import BlockType

logger = logging.getLogger(__name__)


class BlockTypeRegistry:
    """
    Central registry of block type definitions.

    Dynamically discovers the modules of the 'blockscope.matching.block_types'
    package and registers every module-level `DEFINITION`. Types without a
    dedicated definition fall back to the OTHER (generic) definition.
    """

    _definitions: Dict[BlockType, BlockTypeDefinition] = {}
    _loaded: bool = False
    _lock = threading.Lock()

    @classmethod
    def discover(cls) -> None:
        """Imports all definition modules once, in name order."""
        if cls._loaded:
            return

        with cls._lock:
            if cls._loaded:
                return

            import blockscope.matching.block_types as block_types_pkg

            module_names = sorted(name for _, name, _ in pkgutil.iter_modules(block_types_pkg.__path__))
            for name in module_names:
                full_name = f"blockscope.matching.block_types.{name}"
                try:
                    module = importlib.import_module(full_name)
                except ImportError as e:
                    logger.error(f"Error loading block type module {name}: {e}")
                    continue

                definition = getattr(module, "DEFINITION", None)
                if isinstance(definition, BlockTypeDefinition):
                    cls._definitions[definition.block_type] = definition
                    logger.debug(f"Block type loaded: {definition.block_type.value}")

            if BlockType.OTHER not in cls._definitions:
                raise RuntimeError("No generic block type definition found in blockscope.matching.block_types")
            cls._loaded = True

    @classmethod
    def get(cls, block_type: BlockType) -> BlockTypeDefinition:
        """Returns the definition for `block_type`, or the generic one."""
        cls.discover()
        return cls._definitions.get(block_type, cls._definitions[BlockType.OTHER])

    @classmethod
    def registered_types(cls):
        cls.discover()
        return sorted(cls._definitions, key=lambda t: t.value)
