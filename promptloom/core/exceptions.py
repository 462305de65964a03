"""Exception hierarchy for promptloom.

The enrichment functions themselves never raise for missing data; these
errors cover the surrounding layers (configuration, knowledge index I/O).
"""


class PromptloomError(Exception):
    """Base class for all promptloom errors."""


class ConfigError(PromptloomError):
    """Configuration file could not be read or failed validation."""


class KnowledgeIndexError(PromptloomError):
    """Knowledge index file is missing, unreadable, or malformed."""
