"""Area knowledge base."""

from .base import AreaKnowledgeBase, NeighborIssue, load_default_knowledge_base

__all__ = ["AreaKnowledgeBase", "NeighborIssue", "load_default_knowledge_base"]
