#!/usr/bin/env python3
import logging
import sys
import os
import argparse

# Add project directory to Python path (needed before importing streetscroller modules)
project_dir = os.path.dirname(os.path.abspath(__file__))
if project_dir not in sys.path:
    sys.path.insert(0, project_dir)

parser = argparse.ArgumentParser(description='StreetScroller infinite scroll renderer')
parser.add_argument('-c', '--config', default=None,
                    help='Path to config JSON (default: config/config.json, created from the template)')
parser.add_argument('-f', '--frames', type=int, default=200,
                    help='Number of frames to render')
parser.add_argument('-s', '--speed', type=float, default=None,
                    help='Scroll speed in pixels per frame (negative scrolls left)')
parser.add_argument('-o', '--output', default=None,
                    help='Write the rendered frames to this animated GIF')
parser.add_argument('-d', '--debug', action='store_true',
                    help='Enable debug logging and verbose output')
parser.add_argument('--log-format', choices=['readable', 'json'], default='readable',
                    help='Console and file log format')
parser.add_argument('--log-file', default=None,
                    help='Also write logs to this file')
args = parser.parse_args()

debug_mode = args.debug or os.environ.get('STREETSCROLLER_DEBUG', '').lower() == 'true'

# Configure logging before importing any other modules
from streetscroller.logging_config import setup_logging

log_level = logging.DEBUG if debug_mode else logging.INFO
setup_logging(
    level=log_level,
    format_type=args.log_format,
    include_location=debug_mode,
    log_file=args.log_file
)

from streetscroller.display_controller import main

if __name__ == "__main__":
    main(
        config_path=args.config,
        frame_count=args.frames,
        scroll_speed=args.speed,
        output_path=args.output
    )
