"""Static guidance lookups for detected patterns and code issues.

Both tables are ordered ``(trigger, text)`` pairs. Pattern lookup is an
exact match; issue resolution is first-match substring containment, so the
order of ``ISSUE_SOLUTIONS`` is its priority order.
"""

from typing import Dict, Optional, Sequence, Tuple

PATTERN_GUIDES: Tuple[Tuple[str, str], ...] = (
    ("auth", "Use the existing useAuth() hook instead of implementing authentication from scratch"),
    ("fetch", "Use useQuery() or useFetch() for API calls with loading/error handling"),
    ("form", "Use useForm() or React Hook Form for validation and form state"),
    ("router", "Use React Router v6 with hooks (useNavigate, useParams)"),
    ("state", "Prefer useState for local state and useContext for shared state"),
    ("effect", "useEffect with a cleanup function to avoid memory leaks"),
    ("callback", "useCallback for functions passed down as props"),
    ("memo", "useMemo for expensive calculations, React.memo for components"),
)

ISSUE_SOLUTIONS: Tuple[Tuple[str, str], ...] = (
    ("Class Component", "Convert to a Functional Component with hooks (useState, useEffect)"),
    ("dangerouslySetInnerHTML", "Sanitize with DOMPurify before rendering HTML"),
    ("eval()", "Remove eval() - use safe alternatives (the Function constructor is not recommended either)"),
    ("Inline function", "Extract to useCallback to avoid unnecessary re-renders"),
    ("Magic Number", "Extract to constants with descriptive names"),
    ("Missing alt", "Add a descriptive alt attribute to every image"),
)


class PatternGuideTable:
    """Exact, case-sensitive lookup from pattern identifier to guidance."""

    def __init__(self, entries: Sequence[Tuple[str, str]] = PATTERN_GUIDES):
        self._entries = tuple(entries)
        self._index: Dict[str, str] = {}
        for pattern, text in self._entries:
            # First entry wins on duplicate keys
            self._index.setdefault(pattern, text)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return tuple(pattern for pattern, _ in self._entries)

    def lookup(self, pattern: str) -> Optional[str]:
        """Return guidance for ``pattern``, or None when it is unknown."""
        return self._index.get(pattern)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._index


class IssueSolutionResolver:
    """Heuristic classifier from free-text issue descriptions to fixes.

    Not a parser: an issue matches when it contains a trigger phrase.
    Unmatched issues resolve to None.
    """

    def __init__(self, rules: Sequence[Tuple[str, str]] = ISSUE_SOLUTIONS):
        self._rules = tuple(rules)

    @property
    def triggers(self) -> Tuple[str, ...]:
        return tuple(trigger for trigger, _ in self._rules)

    def resolve(self, issue_text: str) -> Optional[str]:
        for trigger, solution in self._rules:
            if trigger in issue_text:
                return solution
        return None
