"""Data contracts for prompt enrichment.

Kept as dataclasses (not ORM models) so the enricher, the knowledge graph
and the CLI can pass them around without any persistence layer.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class EntityType(str, Enum):
    """Kind of code entity tracked by the knowledge model."""
    COMPONENT = "component"
    FUNCTION = "function"
    CONSTANT = "constant"
    TYPE = "type"
    INTERFACE = "interface"
    CLASS = "class"
    HOOK = "hook"
    UTILITY = "utility"


@dataclass(frozen=True)
class MigrationContext:
    """Metadata about the file being migrated.

    ``file_name`` is always the basename of ``file_path``; use
    :meth:`from_file` to build one without repeating it.
    """
    file_name: str
    file_path: str
    source_code: str
    dependencies: Tuple[str, ...] = ()
    detected_patterns: Tuple[str, ...] = ()
    is_component: bool = False

    @classmethod
    def from_file(
        cls,
        file_path: str,
        source_code: str,
        dependencies: Sequence[str] = (),
        detected_patterns: Sequence[str] = (),
        is_component: bool = False,
    ) -> "MigrationContext":
        return cls(
            file_name=os.path.basename(file_path),
            file_path=file_path,
            source_code=source_code,
            dependencies=tuple(dependencies),
            detected_patterns=tuple(detected_patterns),
            is_component=is_component,
        )


@dataclass
class CodeEntity:
    """A named entity from the indexed codebase.

    Owned by the knowledge model; the enricher only reads it.
    """
    id: str
    name: str
    type: EntityType
    file_path: str
    exported: bool = True
    signature: Optional[str] = None
    description: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    props: Optional[Dict[str, str]] = None  # component prop name -> type
    return_type: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "file_path": self.file_path,
            "exported": self.exported,
            "signature": self.signature,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "props": dict(self.props) if self.props is not None else None,
            "return_type": self.return_type,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodeEntity":
        """Build an entity from its index representation.

        Raises:
            KeyError: a required field is missing
            ValueError: ``type`` is not a known EntityType
        """
        props = data.get("props")
        return cls(
            id=data["id"],
            name=data["name"],
            type=EntityType(data["type"]),
            file_path=data["file_path"],
            exported=bool(data.get("exported", True)),
            signature=data.get("signature"),
            description=data.get("description"),
            dependencies=list(data.get("dependencies") or []),
            props=dict(props) if props is not None else None,
            return_type=data.get("return_type"),
            tags=list(data.get("tags") or []),
        )
