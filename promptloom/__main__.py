import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import get_settings, load_settings
from .core.enrichment import MigrationContext, PromptEnricher
from .core.exceptions import PromptloomError
from .core.knowledge import KnowledgeGraph

logger = logging.getLogger(__name__)

DEFAULT_MIGRATE_PROMPT = "Migrate the following file to the target framework."
DEFAULT_REFACTOR_PROMPT = "Refactor the following file to resolve the detected issues."
DEFAULT_TEST_PROMPT = "Generate a complete test suite for the following component."


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging.

    Logs go to stderr; stdout carries only the generated prompt.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptloom",
        description="promptloom - Enrich code-migration prompts with project knowledge",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to promptloom.yaml"
    )
    parser.add_argument(
        "--index",
        type=str,
        default=None,
        help="Knowledge index JSON file (overrides config)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate = subparsers.add_parser("migrate", help="Build an enriched migration prompt")
    migrate.add_argument("file", help="Source file to migrate")
    migrate.add_argument("--prompt", default=DEFAULT_MIGRATE_PROMPT, help="Base instruction")
    migrate.add_argument(
        "--dependency", dest="dependencies", action="append", default=[],
        help="Import identifier used by the file (repeatable)"
    )
    migrate.add_argument(
        "--pattern", dest="patterns", action="append", default=[],
        help="Detected pattern identifier, e.g. auth or fetch (repeatable)"
    )
    migrate.add_argument(
        "--component", action="store_true",
        help="Treat the file as a UI component"
    )

    refactor = subparsers.add_parser("refactor", help="Build an enriched refactor prompt")
    refactor.add_argument("file", help="Source file to refactor")
    refactor.add_argument(
        "--issue", dest="issues", action="append", required=True,
        help="Detected issue description (repeatable)"
    )
    refactor.add_argument("--prompt", default=DEFAULT_REFACTOR_PROMPT, help="Base instruction")

    test = subparsers.add_parser("test", help="Build an enriched test-generation prompt")
    test.add_argument("component", help="Path of the component under test")
    test.add_argument("--prompt", default=DEFAULT_TEST_PROMPT, help="Base instruction")

    return parser


def _load_knowledge(index_arg: Optional[str], configured: Optional[Path]) -> KnowledgeGraph:
    """Load the knowledge graph named on the command line or in settings.

    An explicit ``--index`` must exist. A configured index that is missing
    only yields a warning and an empty graph.
    """
    if index_arg:
        return KnowledgeGraph.load(index_arg)
    if configured is None:
        logger.warning("No knowledge index configured; prompts will carry no project context")
        return KnowledgeGraph()
    if not configured.exists():
        logger.warning("Knowledge index %s not found; using an empty graph", configured)
        return KnowledgeGraph()
    return KnowledgeGraph.load(configured)


def _read_source(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PromptloomError(f"Cannot read source file {path}: {e}") from e


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return the enriched prompt."""
    setup_logging(args.log_level or "INFO")
    settings = load_settings(args.config) if args.config else get_settings()
    if not args.log_level:
        logging.getLogger().setLevel(settings.log_level)

    knowledge = _load_knowledge(args.index, settings.resolve_knowledge_index())
    enricher = PromptEnricher(knowledge)

    if args.command == "migrate":
        source_code = _read_source(args.file)
        context = MigrationContext.from_file(
            args.file,
            source_code,
            dependencies=args.dependencies,
            detected_patterns=args.patterns,
            is_component=args.component,
        )
        prompt = f"{args.prompt}\n\n```\n{source_code}\n```"
        return enricher.enrich_prompt(prompt, context)

    if args.command == "refactor":
        source_code = _read_source(args.file)
        prompt = f"{args.prompt}\n\n```\n{source_code}\n```"
        return enricher.enrich_refactor_prompt(prompt, args.file, args.issues)

    return enricher.enrich_test_prompt(args.prompt, args.component)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for promptloom."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        output = run(args)
    except PromptloomError as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(output)
    if not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
