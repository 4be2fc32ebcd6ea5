"""Command-line harness: select games from a headers file with a criteria file."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from tagmatch.config.environment import EnvironmentConfig, load_environment_config
from tagmatch.config.exceptions import ConfigurationError
from tagmatch.config.factory import build_matcher
from tagmatch.config.loader import format_validation_errors, load_config
from tagmatch.config.models import FilterConfig
from tagmatch.domain.models import GameHeaders
from tagmatch.logging import get_logger
from tagmatch.logging.config import configure_logging
from tagmatch.logging.context import log_context
from tagmatch.matching.engine import TagCriteriaMatcher
from tagmatch.matching.exceptions import FatalMatchError

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_FATAL = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[FilterConfig, EnvironmentConfig]:
    """
    Load the criteria file and environment, resolving the log level.

    Priority for the log level: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    env_config = load_environment_config()
    if config_path is None and env_config.config_path:
        config_path = Path(env_config.config_path)
    app_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def read_headers_file(headers_path: Path) -> List[GameHeaders]:
    """
    Read a JSON list of {tag name: value} objects.

    Raises:
        ConfigurationError: If the file cannot be read or is not a list of objects
    """
    try:
        with open(headers_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to read headers file {headers_path}: {e}",
            suggestions=["The headers file must be a JSON list of objects"],
        ) from e

    if not isinstance(raw, list):
        raise ConfigurationError(
            f"Headers file {headers_path} must contain a JSON list",
        )
    try:
        return [GameHeaders(tags=entry) for entry in raw]
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid game headers in {headers_path}",
            errors=format_validation_errors(e),
        ) from e


def select_games(matcher: TagCriteriaMatcher, games: List[GameHeaders], out=None) -> int:
    """Write each accepted game as a JSON line and return how many were accepted."""
    out = out or sys.stdout
    accepted = 0
    for index, game in enumerate(games):
        with log_context(record_index=index):
            if matcher.evaluate_headers(game.tags):
                accepted += 1
                out.write(json.dumps(game.tags, ensure_ascii=False) + "\n")
    return accepted


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 for configuration errors, 2 when the
        engine reports a broken invariant
    """
    start_time = time.time()
    parser = argparse.ArgumentParser(
        description="Select chess games whose header tags satisfy a set of criteria"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Criteria file (default: tagmatch.yaml or config/tagmatch.yaml)",
    )
    parser.add_argument(
        "--headers",
        type=Path,
        default=None,
        help="JSON file holding a list of game header objects",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Validate the criteria file and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        matcher = build_matcher(app_config)
        logger.info(
            "Criteria loaded",
            extra={
                "event": "config.loaded",
                "criteria_count": app_config.criteria_count(),
                "position_patterns": len(matcher.pending_position_patterns),
            },
        )

        if matcher.pending_position_patterns:
            logger.warning(
                "Position patterns are not evaluated by this harness; "
                "they place no restriction on the selected games",
                extra={
                    "event": "config.position_patterns_ignored",
                    "position_patterns": len(matcher.pending_position_patterns),
                },
            )

        if args.validate_only:
            print("Configuration is valid")
            return EXIT_OK

        if args.headers is None:
            parser.error("--headers is required unless --validate-only is given")

        games = read_headers_file(args.headers)
        accepted = select_games(matcher, games)

        logger.info(
            f"Selected {accepted} of {len(games)} games",
            extra={
                "event": "selection.completed",
                "games_total": len(games),
                "games_accepted": accepted,
                "duration_seconds": round(time.time() - start_time, 3),
            },
        )
        return EXIT_OK

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except FatalMatchError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Matching aborted",
            extra={
                "event": "matching.aborted",
                "error_type": type(e).__name__,
                "error": str(e),
            },
        )
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
