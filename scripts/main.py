#!/usr/bin/env python3
"""
Draw Attributes - Command Line Entry Point

Usage:
    draw-attributes classify --tag color --number 7 --type 1 --year 2024
    draw-attributes annotate --tag animal --type 1 --period 100

Commands:
    classify    Classify one number under a category tag
    annotate    Load a lottery type's history and print the value frequency
"""

import argparse
import logging
import sys

from attributes.dispatcher import AttributeType
from attributes.engine import AttributeEngine
from attributes.exceptions import AttributeDataError
from attributes.transport import HttpFetcher
from config.attribute_config import DEFAULT_PERIOD, LOTTERY_TYPES, PERIOD_OPTIONS
from scripts.analyze_data import attribute_frequency
from scripts.fetch_data import fetch_draw_history, history_years
from utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Draw number attribute classification')
    parser.add_argument('--base-url', help='Override the API base URL')
    parser.add_argument('--verbose', action='store_true', help='Log at DEBUG level')
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    tags = [t.value for t in AttributeType]
    
    classify_parser = subparsers.add_parser('classify', help='Classify one number')
    classify_parser.add_argument('--tag', choices=tags, required=True)
    classify_parser.add_argument('--number', required=True)
    classify_parser.add_argument('--type', default='1', choices=sorted(LOTTERY_TYPES) + ['49', '60'],
                                 help='Lottery type id or number range')
    classify_parser.add_argument('--year', type=int, help='Reference year (default: current year)')
    
    annotate_parser = subparsers.add_parser('annotate', help='Attribute frequency over draw history')
    annotate_parser.add_argument('--tag', choices=tags, required=True)
    annotate_parser.add_argument('--type', default='1', choices=sorted(LOTTERY_TYPES))
    annotate_parser.add_argument('--year', type=int, help='History year (default: current year)')
    annotate_parser.add_argument('--period', type=int, default=DEFAULT_PERIOD, choices=PERIOD_OPTIONS)
    annotate_parser.add_argument('--ball', default='num_7', help='Ball column, num_1..num_7')
    
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    
    fetcher = HttpFetcher(base_url=args.base_url)
    engine = AttributeEngine(fetcher)
    try:
        if args.command == 'classify':
            year = args.year
            if not engine.ensure_year_loaded(year):
                logger.warning(f"Reference tables incomplete: {engine.last_error}")
            print(engine.classify(args.tag, args.number, args.type, year))
            return 0
        
        try:
            history = fetch_draw_history(fetcher, args.type, args.year, args.period)
        except AttributeDataError as e:
            logger.error(f"Could not load draw history: {e}")
            return 1
        if not engine.ensure_years_loaded(history_years(history), show_progress=True):
            logger.warning(f"Reference tables incomplete: {engine.last_error}")
        frequency = attribute_frequency(history, engine, args.tag, args.type, args.ball)
        print(frequency.to_string())
        return 0
    finally:
        fetcher.close()


if __name__ == '__main__':
    sys.exit(main())
