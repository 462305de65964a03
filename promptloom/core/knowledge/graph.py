"""In-memory knowledge graph of an indexed codebase.

Indexes components, functions, constants and types, and answers the
queries the prompt enricher needs:
- free-text search over names and descriptions
- similar-component lookup (to avoid rebuilding existing components)
- relevant project context for a file and its dependencies
- migration recommendations

The graph is built once (``add_entity`` or ``load``) and then only read,
so concurrent readers need no locking.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from ..enrichment.models import CodeEntity, EntityType, MigrationContext
from ..enrichment.paths import relative_to_file
from ..exceptions import KnowledgeIndexError

logger = logging.getLogger(__name__)

THEME_KEYWORDS = ("color", "spacing", "font", "size", "theme", "palette")
COMMON_PATTERN_KEYWORDS = ("useAuth", "useFetch", "useQuery", "useApi", "useForm", "useRouter")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass
class DesignSystemInfo:
    """Design-system view derived from indexed entities."""
    components: Dict[str, CodeEntity] = field(default_factory=dict)
    colors: Dict[str, str] = field(default_factory=dict)
    spacing: Dict[str, str] = field(default_factory=dict)
    typography: Dict[str, str] = field(default_factory=dict)
    patterns: Dict[str, CodeEntity] = field(default_factory=dict)  # useAuth, useFetch, ...


class KnowledgeGraph:
    """Code-entity index implementing the enricher's ``KnowledgeModel``."""

    def __init__(self) -> None:
        self._entities: Dict[str, CodeEntity] = {}
        self._design_system = DesignSystemInfo()

    @property
    def design_system(self) -> DesignSystemInfo:
        return self._design_system

    def __len__(self) -> int:
        return len(self._entities)

    # ── Indexing ───────────────────────────────────────────────────────

    def add_entity(self, entity: CodeEntity) -> None:
        """Add an entity and classify it into the design system."""
        self._entities[entity.id] = entity

        if entity.type == EntityType.COMPONENT and entity.exported:
            self._design_system.components[entity.name] = entity

        if entity.type == EntityType.CONSTANT and _is_theme_related(entity):
            self._categorize_theme_constant(entity)

        if _is_common_pattern(entity):
            self._design_system.patterns[entity.name] = entity

    # ── Queries ────────────────────────────────────────────────────────

    def search(self, query: str) -> List[CodeEntity]:
        """Case-insensitive substring search over names and descriptions."""
        needle = query.lower()
        return [
            entity for entity in self._entities.values()
            if needle in entity.name.lower()
            or (entity.description and needle in entity.description.lower())
        ]

    def find_similar_components(self, component_name: str) -> List[CodeEntity]:
        """Design-system components whose names resemble ``component_name``.

        A component matches when either name is a prefix of the other
        (Button / ButtonPrimary), or when it contains any camel-case word
        of the query (UserCard -> "user", "card").
        """
        name_lower = component_name.lower()
        words = [w.lower() for w in _CAMEL_BOUNDARY.split(component_name) if w]

        similar = []
        for comp in self._design_system.components.values():
            comp_lower = comp.name.lower()
            if name_lower.startswith(comp_lower) or comp_lower.startswith(name_lower):
                similar.append(comp)
            elif any(word in comp_lower for word in words):
                similar.append(comp)
        return similar

    def get_relevant_context(self, file_path: str, dependencies: Sequence[str]) -> str:
        """Describe the design system and dependency entities relevant to a file.

        Returns an empty string when the graph holds nothing applicable.
        """
        lines: List[str] = []
        ds = self._design_system

        if ds.components:
            lines.append("\n## 🎨 Design System Components:")
            for name, comp in ds.components.items():
                lines.append(f"- {name}: {relative_to_file(comp.file_path, file_path)}")
                if comp.props:
                    lines.append(f"  Props: {', '.join(comp.props.keys())}")

        if ds.colors:
            lines.append("\n## 🎨 Theme Colors:")
            for name, value in ds.colors.items():
                lines.append(f"- {name}: {value}")

        if ds.patterns:
            lines.append("\n## 🔧 Common Patterns:")
            for name, pattern in ds.patterns.items():
                lines.append(f"- {name}: {pattern.description or 'Standard pattern'}")

        related = [self._entities[dep] for dep in dependencies if dep in self._entities]
        if related:
            lines.append("\n## 🔗 Related Entities:")
            for entity in related:
                lines.append(f"- {entity.name} ({entity.type.value}): {entity.signature or ''}")

        return "\n".join(lines)

    def generate_recommendations(self, context: MigrationContext) -> List[str]:
        """Recommendations for the file being migrated, in a fixed order."""
        ds = self._design_system
        recommendations: List[str] = []

        if context.is_component and ds.components:
            recommendations.append(
                f"✅ Design System available with {len(ds.components)} components. "
                "Use these instead of native HTML."
            )

        if "auth" in context.detected_patterns:
            auth_pattern = ds.patterns.get("useAuth")
            if auth_pattern:
                recommendations.append(
                    f"✅ Authentication pattern available: {auth_pattern.file_path}. "
                    "Use this hook instead of implementing from scratch."
                )

        if "fetch" in context.detected_patterns:
            fetch_pattern = ds.patterns.get("useFetch") or ds.patterns.get("useQuery")
            if fetch_pattern:
                recommendations.append(
                    f"✅ Fetching pattern available: {fetch_pattern.name}. "
                    "Use it for API calls."
                )

        if ds.colors:
            recommendations.append(
                "✅ Theme tokens available. Use theme variables instead of hardcoded colors."
            )

        return recommendations

    def get_stats(self) -> Dict[str, Any]:
        by_type: Dict[str, int] = {}
        for entity in self._entities.values():
            by_type[entity.type.value] = by_type.get(entity.type.value, 0) + 1

        ds = self._design_system
        return {
            "total_entities": len(self._entities),
            "by_type": by_type,
            "design_system": {
                "components": len(ds.components),
                "theme_tokens": len(ds.colors) + len(ds.spacing) + len(ds.typography),
                "patterns": len(ds.patterns),
            },
        }

    # ── Serialization ──────────────────────────────────────────────────

    def to_json(self) -> str:
        ds = self._design_system
        payload = {
            "entities": [entity.to_dict() for entity in self._entities.values()],
            "design_system": {
                "components": list(ds.components.keys()),
                "theme": {
                    "colors": ds.colors,
                    "spacing": ds.spacing,
                    "typography": ds.typography,
                },
                "patterns": list(ds.patterns.keys()),
            },
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "KnowledgeGraph":
        """Rebuild a graph from :meth:`to_json` output.

        Entities are stored directly; the design-system maps are restored
        from the payload rather than re-derived, so an index produced by
        another indexer keeps its own classification. A payload without a
        ``design_system`` section has it derived from the entities.

        Raises:
            KnowledgeIndexError: text is not valid JSON or not an index payload
        """
        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("index must be a JSON object")
            items = data["entities"]
            if not isinstance(items, list):
                raise ValueError("'entities' must be a list")

            entities = []
            for item in items:
                if not isinstance(item, dict):
                    raise ValueError(f"entity must be an object, got {type(item).__name__}")
                entities.append(CodeEntity.from_dict(item))

            graph = cls()
            by_name: Dict[str, CodeEntity] = {}
            for entity in entities:
                graph._entities[entity.id] = entity
                by_name.setdefault(entity.name, entity)

            ds_data = data.get("design_system")
            if ds_data is None:
                for entity in entities:
                    graph.add_entity(entity)
            else:
                graph._restore_design_system(ds_data, by_name)
        except (ValueError, KeyError, TypeError) as e:
            raise KnowledgeIndexError(f"Invalid knowledge index: {e}") from e
        return graph

    @classmethod
    def load(cls, path: Union[str, Path]) -> "KnowledgeGraph":
        """Load a graph from a JSON index file.

        Raises:
            KnowledgeIndexError: file cannot be read or is not a valid index
        """
        index_path = Path(path)
        try:
            text = index_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise KnowledgeIndexError(f"Cannot read knowledge index {index_path}: {e}") from e

        graph = cls.from_json(text)
        logger.info("Loaded knowledge index %s (%d entities)", index_path, len(graph))
        return graph

    def save(self, path: Union[str, Path]) -> None:
        index_path = Path(path)
        index_path.parent.mkdir(parents=True, exist_ok=True)
        index_path.write_text(self.to_json(), encoding="utf-8")
        logger.info("Saved knowledge index %s (%d entities)", index_path, len(self))

    # ── Internal ───────────────────────────────────────────────────────

    def _restore_design_system(self, ds_data: Any, by_name: Dict[str, CodeEntity]) -> None:
        """Restore stored design-system maps. Raises ValueError on a bad shape."""
        if not isinstance(ds_data, dict):
            raise ValueError("'design_system' must be an object")

        components = _expect(ds_data, "components", list)
        patterns = _expect(ds_data, "patterns", list)
        theme = _expect(ds_data, "theme", dict)
        colors = _expect(theme, "colors", dict)
        spacing = _expect(theme, "spacing", dict)
        typography = _expect(theme, "typography", dict)

        ds = self._design_system
        for name in components:
            if name in by_name:
                ds.components[name] = by_name[name]
        ds.colors.update(colors)
        ds.spacing.update(spacing)
        ds.typography.update(typography)
        for name in patterns:
            if name in by_name:
                ds.patterns[name] = by_name[name]

    def _categorize_theme_constant(self, entity: CodeEntity) -> None:
        name_lower = entity.name.lower()
        value = entity.signature or ""
        ds = self._design_system

        if "color" in name_lower or "palette" in name_lower:
            ds.colors[entity.name] = value
        elif any(k in name_lower for k in ("spacing", "margin", "padding")):
            ds.spacing[entity.name] = value
        elif any(k in name_lower for k in ("font", "text", "typography")):
            ds.typography[entity.name] = value


def _expect(data: Dict[str, Any], key: str, kind: type) -> Any:
    """``data[key]`` checked against ``kind``; missing or null yields an empty one."""
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise ValueError(f"'{key}' must be a {kind.__name__}, got {type(value).__name__}")
    return value


def _is_theme_related(entity: CodeEntity) -> bool:
    name_lower = entity.name.lower()
    return any(keyword in name_lower for keyword in THEME_KEYWORDS)


def _is_common_pattern(entity: CodeEntity) -> bool:
    return any(keyword in entity.name for keyword in COMMON_PATTERN_KEYWORDS)
