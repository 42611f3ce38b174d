#!/usr/bin/env python3
"""
ProjectHub Client

Browse, search, create, edit and delete projects held by a ProjectHub API.
"""

import sys
import argparse
from projecthub.utils.config import Config
from projecthub.utils.api_client import APIClient
from projecthub.utils.debug_logger import DebugLogger
from projecthub.utils.exporter import SnapshotExporter
from projecthub.operations.project_api import ProjectApi
from projecthub.views.project_list import ProjectListContainer
from projecthub.views.console import ProjectConsole

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='ProjectHub Client - Manage projects from the terminal'
    )
    parser.add_argument('--env-file', help='Path to environment file (default: .env)')
    parser.add_argument('--api-url', help='Base URL of the API (default: http://localhost:4000/api)')
    parser.add_argument('--debug', action='store_true', help='Enable debug output')
    parser.add_argument('--log-file', help='Append debug log lines to this file')
    parser.add_argument('--output-dir', help='Output directory for exports')
    return parser.parse_args(argv)

def build_console(config, debug_logger):
    """Wire the API client, container and console together."""
    api_client = APIClient(config.api_url, config, config.debug, debug_logger)
    project_api = ProjectApi(api_client, debug_logger)
    container = ProjectListContainer(project_api, config.search_delay, debug_logger)
    exporter = SnapshotExporter(config, debug_logger)
    return ProjectConsole(container, exporter)

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Initialize configuration (with optional custom env file)
    env_file = args.env_file or '.env'
    config = Config.from_env(env_file)

    # Override with command line arguments if provided
    config.apply_args(args)

    # Validate configuration
    is_valid, error = config.validate()
    if not is_valid:
        print(f"Configuration error: {error}")
        sys.exit(1)

    print("="*80)
    print("ProjectHub Client")
    print("="*80)
    print(f"API URL: {config.api_url}")
    print(f"Output Directory: {config.output_directory}")
    print("="*80)

    debug_logger = DebugLogger(config.log_file, console_debug=config.debug)
    debug_logger.log(f"API URL: {config.api_url}")

    try:
        console = build_console(config, debug_logger)
        console.run()
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        debug_logger.log("INTERRUPTED: Operation cancelled by user")
    except Exception as e:
        print(f"\nError: {e}")
        debug_logger.log(f"FATAL ERROR: {e}")
        if config.debug:
            import traceback
            debug_logger.log(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)
    finally:
        debug_logger.close()

if __name__ == "__main__":
    main()
