"""Design tree retrieval and simplification."""

from .models import ImageNode, SimplifiedDesign, SimplifiedNode
from .retriever import RAW_DUMP_NAME, SIMPLIFIED_DUMP_NAME, TreeRetriever
from .simplify import simplify_design

__all__ = [
    "ImageNode",
    "SimplifiedDesign",
    "SimplifiedNode",
    "TreeRetriever",
    "RAW_DUMP_NAME",
    "SIMPLIFIED_DUMP_NAME",
    "simplify_design",
]
