#!/usr/bin/env python3
"""
PREMIS command line

Generate PREMIS XML or its HTML rendering for a Fedora object.

Usage:
    premis-core download <pid> [--output <file>]
    premis-core view <pid> [--output <file>]

Examples:
    # Save PREMIS XML as islandora_1_premis.xml
    premis-core download islandora:1

    # Use a config file and print the HTML view
    premis-core --config premis.yaml view islandora:1 -o -
"""

import argparse
import logging
import sys
from pathlib import Path

from premis_core.config.settings import PremisConfig, apply_env_overrides, load_config
from premis_core.errors import ObjectNotFoundError, StylesheetError
from premis_core.premis.generator import PremisGenerator, download_filename
from premis_core.repository.fedora import FedoraRepository

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="premis-core",
        description="Generate PREMIS preservation metadata for Fedora objects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s download islandora:1
  %(prog)s download islandora:1 --output premis.xml
  %(prog)s --config premis.yaml view islandora:1 -o -
        """
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to a YAML or JSON configuration file"
    )

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: from configuration, INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    download = subparsers.add_parser("download", help="Write PREMIS XML for an object")
    download.add_argument("pid", help="Object identifier, e.g. islandora:1")
    download.add_argument(
        "-o", "--output",
        default=None,
        help="Output file, '-' for stdout (default: <pid>_premis.xml)"
    )

    view = subparsers.add_parser("view", help="Write the PREMIS HTML view for an object")
    view.add_argument("pid", help="Object identifier, e.g. islandora:1")
    view.add_argument(
        "-o", "--output",
        default="-",
        help="Output file, '-' for stdout (default: stdout)"
    )

    return parser


def write_output(content: str, output: str) -> None:
    if output == "-":
        sys.stdout.write(content)
        return
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    print(f"✓ Written: {output_path}", file=sys.stderr)


def main(argv=None, generator: PremisGenerator = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else PremisConfig()
    except (FileNotFoundError, ValueError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1
    config = apply_env_overrides(config)

    level = (args.log_level or config.log_level).upper()
    if level not in LOG_LEVELS:
        print(f"✗ Error: Unknown log level: {level}", file=sys.stderr)
        return 1
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if generator is None:
        repository = FedoraRepository.from_config(config.repository)
        generator = PremisGenerator(repository, repository, config)

    try:
        if args.command == "download":
            content = generator.generate_premis(args.pid)
            output = args.output or download_filename(args.pid)
        else:
            content = generator.render_html(args.pid)
            output = args.output
    except ObjectNotFoundError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    except StylesheetError as e:
        logger.error(f"Stylesheet error: {e}")
        return 1

    if not content:
        logger.warning(f"Transform produced no content for {args.pid}")

    write_output(content, output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
