"""Knowledge model backed by an indexed codebase."""

from .graph import DesignSystemInfo, KnowledgeGraph

__all__ = ["DesignSystemInfo", "KnowledgeGraph"]
