"""promptloom — enrich code-migration prompts with project knowledge."""

__version__ = "0.1.0"
