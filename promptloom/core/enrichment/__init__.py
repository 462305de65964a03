"""Prompt enrichment — combine a base instruction with project knowledge.

Public API:
    PromptEnricher         — builds migration, refactor and test prompts
    KnowledgeModel         — protocol the enricher queries
    PatternGuideTable      — pattern identifier -> best-practice guidance
    IssueSolutionResolver  — issue description -> suggested fix
"""

from .enricher import KnowledgeModel, PromptEnricher
from .guidance import IssueSolutionResolver, PatternGuideTable
from .models import CodeEntity, EntityType, MigrationContext

__all__ = [
    "CodeEntity",
    "EntityType",
    "IssueSolutionResolver",
    "KnowledgeModel",
    "MigrationContext",
    "PatternGuideTable",
    "PromptEnricher",
]
