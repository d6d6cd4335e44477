#!/usr/bin/env python3
"""
Fetch icons into the local fetched-icon store ahead of slide generation.

Icons fetched here are rendered inline (offline) by later builds instead of
through their web font or placeholder markup.

Example:
    python scripts/warm_icon_cache.py health:stethoscope ms:home planning
"""

import sys
import asyncio
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from exceptions import ConfigError
from icons import IconService
from logging_config import setup_logging


def main() -> int:
    parser = argparse.ArgumentParser(description='Fetch icons into the local fetched-icon store')
    parser.add_argument(
        'icons',
        nargs='+',
        help='Icon references or aliases (e.g., health:stethoscope)'
    )
    parser.add_argument(
        '--registry',
        '-r',
        help='Icon registry YAML (default: $SLIDE_GEN_ICON_REGISTRY or icons/registry.yaml)'
    )
    parser.add_argument(
        '--fetched-dir',
        '-o',
        help='Fetched-icon store (default: $SLIDE_GEN_FETCHED_DIR or icons/fetched)'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        help='Also write log output to this file'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Show detailed logging'
    )

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging('warm_icon_cache', level=level, log_file=args.log_file)

    try:
        service = IconService(registry_path=args.registry, fetched_dir=args.fetched_dir)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    failures = asyncio.run(service.warm(args.icons))
    for icon_ref, error in failures.items():
        logger.error(f"✗ {icon_ref}: {error}")

    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
