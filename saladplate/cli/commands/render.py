"""Render command implementation."""

import asyncio
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from saladplate.cli.output import OutputCoordinator
from saladplate.config import ConfigLoader
from saladplate.engine import STDIN, Options, TemplateEngine
from saladplate.exceptions import ConfigValidationError, TemplateError
from saladplate.resolvers import read_text


logger = logging.getLogger(__name__)

# Command-line spelling for standard input.
STDIN_ARGUMENT = '-'


def parse_env(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse KEY=VALUE pairs from --env flags."""
    environment = {}
    for item in pairs or []:
        if '=' not in item:
            raise ValueError(f"Invalid --env format: {item}. Expected KEY=VALUE")
        key, value = item.split('=', 1)
        if not key:
            raise ValueError(f"Invalid --env format: {item}. KEY cannot be empty")
        environment[key] = value
    return environment


def configure_logging(args: Namespace, debug: bool) -> None:
    """Set up stderr logging from --log-level, --quiet and --debug."""
    log_level = getattr(logging, args.log_level.upper())
    if debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def build_settings(args: Namespace) -> Tuple[Options, Dict[str, Optional[str]]]:
    """
    Merge the options file with command-line flags.

    Returns:
        Templating options and output settings (output, directory, suffix)

    Raises:
        ConfigValidationError: If the options file is invalid
        ValueError: If an --env flag is malformed
    """
    config = {}
    if args.config:
        config = ConfigLoader().load(Path(args.config))

    environment = dict(config.get('environment', {}))
    environment.update(parse_env(args.env))

    options = Options(
        debug=bool(args.debug or config.get('debug', False)),
        environment=environment,
    )
    outputs = {
        'output': args.output or config.get('output'),
        'directory': args.directory or config.get('directory'),
        'suffix': args.suffix or config.get('suffix'),
    }
    return options, outputs


async def render_file(engine: TemplateEngine, filename: str) -> Tuple[str, str]:
    """
    Read and template one input.

    Returns:
        Source location and rendered text
    """
    source = STDIN if filename == STDIN_ARGUMENT else filename
    if engine.options.debug:
        logger.debug(f"reading {source}...")
    if source == STDIN:
        content = await asyncio.to_thread(sys.stdin.read)
    else:
        content = await asyncio.to_thread(read_text, source)

    if engine.options.debug:
        logger.debug(f"templating {source}...")
    return source, await engine.template(content, source)


async def render_all(engine: TemplateEngine, filenames: List[str], coordinator: OutputCoordinator) -> int:
    """
    Template every input concurrently and write results in argument order.

    A failing input is reported and skipped; the others are still written.

    Returns:
        0 if every input rendered, else the highest exit code among failures
    """
    results = await asyncio.gather(
        *(render_file(engine, filename) for filename in filenames),
        return_exceptions=True,
    )

    exit_code = 0
    for filename, result in zip(filenames, results):
        if isinstance(result, TemplateError):
            logger.error(str(result))
            exit_code = max(exit_code, result.exit_code)
        elif isinstance(result, (OSError, UnicodeDecodeError)):
            logger.error(f"Cannot read {filename}: {result}")
            exit_code = max(exit_code, 1)
        elif isinstance(result, BaseException):
            raise result
        else:
            source, text = result
            destination = coordinator.write(source, text)
            if engine.options.debug:
                logger.debug(f"wrote {source} to {destination}")

    return exit_code


def render_files(args: Namespace) -> int:
    """Render the input files named on the command line."""
    try:
        options, outputs = build_settings(args)
    except ConfigValidationError as e:
        configure_logging(args, bool(args.debug))
        for error in e.errors:
            logger.error(f"Validation error: {error.path}: {error.message}")
        return e.exit_code
    except ValueError as e:
        configure_logging(args, bool(args.debug))
        logger.error(str(e))
        return 2

    configure_logging(args, options.debug)
    if options.debug:
        logger.debug("debug mode enabled")

    engine = TemplateEngine(options)
    try:
        with OutputCoordinator(**outputs) as coordinator:
            return asyncio.run(render_all(engine, args.files, coordinator))
    except OSError as e:
        logger.error(f"Cannot write output: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
