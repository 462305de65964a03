"""Assemble enriched prompts from a base instruction and project knowledge.

Three entry points, each a pure function of its arguments plus the
knowledge model's current answers:

- enrich_prompt          — migration of a single file
- enrich_refactor_prompt — refactoring against a list of detected issues
- enrich_test_prompt     — test generation for one component

Sections are conditional: missing data omits a section, it never raises.
Errors raised by the knowledge model propagate to the caller untouched.
"""

import logging
from typing import List, Optional, Protocol, Sequence

from .constants import (
    HEADING_COMPONENT_INFO,
    HEADING_ISSUES,
    HEADING_PATTERN_GUIDANCE,
    HEADING_PROJECT_CONTEXT,
    HEADING_PROPS,
    HEADING_RECOMMENDATIONS,
    HEADING_REQUIRED_TESTS,
    HEADING_SIMILAR_COMPONENTS,
    HEADING_SOLUTIONS,
    PROJECT_CONSTRAINTS,
    REQUIRED_TEST_CATEGORIES,
)
from .guidance import IssueSolutionResolver, PatternGuideTable
from .models import CodeEntity, MigrationContext
from .paths import relative_to_file, strip_extension

logger = logging.getLogger(__name__)


class KnowledgeModel(Protocol):
    """Read-only project knowledge consumed by the enricher."""

    def get_relevant_context(self, file_path: str, dependencies: Sequence[str]) -> str:
        ...

    def generate_recommendations(self, context: MigrationContext) -> Sequence[str]:
        ...

    def find_similar_components(self, base_name: str) -> Sequence[CodeEntity]:
        ...

    def search(self, query: str) -> Sequence[CodeEntity]:
        ...


class PromptEnricher:
    """Builds migration, refactor and test-generation prompts.

    Args:
        knowledge: Knowledge model answering context/similarity/search queries
        pattern_guides: Pattern guidance table (defaults to the built-in one)
        issue_resolver: Issue resolver (defaults to the built-in rules)
    """

    def __init__(
        self,
        knowledge: KnowledgeModel,
        pattern_guides: Optional[PatternGuideTable] = None,
        issue_resolver: Optional[IssueSolutionResolver] = None,
    ):
        self._knowledge = knowledge
        self._pattern_guides = pattern_guides or PatternGuideTable()
        self._issue_resolver = issue_resolver or IssueSolutionResolver()

    # ── Public API ─────────────────────────────────────────────────────

    def enrich_prompt(self, base_prompt: str, context: MigrationContext) -> str:
        """Enrich a migration prompt with project context.

        Section order: base prompt, project context, recommendations,
        similar components (components only), pattern guidance, constraints.
        """
        sections: List[str] = [base_prompt]

        relevant_context = self._knowledge.get_relevant_context(
            context.file_path, list(context.dependencies)
        )
        if relevant_context:
            sections.append(HEADING_PROJECT_CONTEXT)
            sections.append(relevant_context)

        recommendations = self._knowledge.generate_recommendations(context)
        if recommendations:
            sections.append(HEADING_RECOMMENDATIONS)
            for rec in recommendations:
                sections.append(f"{rec}\n")

        if context.is_component:
            sections.extend(self._similar_components_section(context))

        sections.extend(self._pattern_guidance_section(context.detected_patterns))

        sections.append(PROJECT_CONSTRAINTS)

        logger.debug(
            "Enriched migration prompt for %s (%d fragments)",
            context.file_path, len(sections),
        )
        return "\n".join(sections)

    def enrich_refactor_prompt(
        self, base_prompt: str, file_path: str, issues: Sequence[str]
    ) -> str:
        """Append detected issues and their known solutions."""
        sections: List[str] = [base_prompt]

        sections.append(HEADING_ISSUES)
        for issue in issues:
            sections.append(f"- {issue}")

        sections.append(HEADING_SOLUTIONS)
        resolved = 0
        for issue in issues:
            solution = self._issue_resolver.resolve(issue)
            if solution:
                sections.append(f"- {solution}")
                resolved += 1

        logger.debug(
            "Enriched refactor prompt for %s (%d issues, %d resolved)",
            file_path, len(issues), resolved,
        )
        return "\n".join(sections)

    def enrich_test_prompt(self, base_prompt: str, component_path: str) -> str:
        """Append component metadata and the required-test checklist.

        Returns ``base_prompt`` unchanged when the component is unknown.
        """
        results = self._knowledge.search(strip_extension(component_path))
        entity = results[0] if results else None
        if entity is None:
            logger.debug("No indexed entity for %s; test prompt left as-is", component_path)
            return base_prompt

        sections: List[str] = [base_prompt]
        sections.append(HEADING_COMPONENT_INFO)
        sections.append(f"- Type: {_type_label(entity)}")

        if entity.props:
            sections.append(HEADING_PROPS)
            for name, prop_type in entity.props.items():
                sections.append(f"- {name}: {prop_type}")

        sections.append(HEADING_REQUIRED_TESTS)
        sections.extend(REQUIRED_TEST_CATEGORIES)

        return "\n".join(sections)

    # ── Sections ───────────────────────────────────────────────────────

    def _similar_components_section(self, context: MigrationContext) -> List[str]:
        similar = self._knowledge.find_similar_components(
            strip_extension(context.file_name)
        )
        if not similar:
            return []

        lines = [HEADING_SIMILAR_COMPONENTS]
        for comp in similar:
            lines.append(f"- {comp.name}: {relative_to_file(comp.file_path, context.file_path)}")
            if comp.description:
                lines.append(f"  Description: {comp.description}")
        return lines

    def _pattern_guidance_section(self, patterns: Sequence[str]) -> List[str]:
        lines: List[str] = []
        for pattern in patterns:
            guidance = self._pattern_guides.lookup(pattern)
            if guidance:
                lines.append(f"- {pattern}: {guidance}\n")
        if not lines:
            return []
        return [HEADING_PATTERN_GUIDANCE] + lines


def _type_label(entity: CodeEntity) -> str:
    # Stub knowledge models may hand back plain strings
    return getattr(entity.type, "value", entity.type)
