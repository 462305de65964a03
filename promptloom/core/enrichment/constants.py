"""Static text used when assembling enriched prompts.

Headings, the project constraints block and the test checklist live here
so every enrichment call emits identical wording.
"""

# =============================================================================
# Section Headings
# =============================================================================

HEADING_PROJECT_CONTEXT = "\n## 📚 Project Context:\n"
HEADING_RECOMMENDATIONS = "\n## 💡 Recommendations:\n"
HEADING_SIMILAR_COMPONENTS = "\n## 🔍 Similar Existing Components:\n"
HEADING_PATTERN_GUIDANCE = "\n## 🎯 Detected Patterns and Best Practices:\n"
HEADING_ISSUES = "\n## 🔧 Issues Detected:\n"
HEADING_SOLUTIONS = "\n## ✅ Recommended Solutions:\n"
HEADING_COMPONENT_INFO = "\n## 📋 Component Information:\n"
HEADING_PROPS = "\n### Props:"
HEADING_REQUIRED_TESTS = "\n## ✅ Required Tests:\n"

# =============================================================================
# Project Constraints
# =============================================================================

# Appended verbatim to every migration prompt.
PROJECT_CONSTRAINTS = """
## ⚠️ Project Constraints:

1. **DO NOT build components from scratch** if a similar one exists in the Design System
2. **DO NOT hardcode colors** - use theme tokens
3. **DO NOT use Class Components** - Functional Components + Hooks only
4. **DO NOT use 'any'** in TypeScript - always type correctly
5. **Accessibility is MANDATORY** - every interactive element needs aria-labels
6. **Performance** - memoize callbacks and expensive components
7. **Security** - ALWAYS sanitize user input (DOMPurify)
"""

# =============================================================================
# Test Checklist
# =============================================================================

REQUIRED_TEST_CATEGORIES = (
    "1. Basic rendering (smoke test)",
    "2. Props render correctly",
    "3. User interactions (clicks, inputs)",
    "4. Edge cases and error states",
    "5. Accessibility (aria-labels, keyboard navigation)",
)
