"""Core subsystems of promptloom.

- enrichment — prompt assembly (PromptEnricher and its static tables)
- knowledge  — production knowledge model (KnowledgeGraph)
- config     — YAML settings loader
"""
