"""Main entry point for the shub CLI."""

from dotenv import load_dotenv
load_dotenv()

import sys
import argparse
from typing import List, Optional

from .config import Config
from .core.errors import ShubError
from .core.logger import setup_logging
from .core.github_client import GitHubClient
from .commands.registry import registry


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='shub',
        description='Command-line client for your GitHub repositories and their builds',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the cached build dashboard
  shub dashboard

  # Fetch fresh build statuses, four at a time
  shub dashboard --update --workers 4

  # Re-sync the repository list, then fetch statuses
  shub dashboard --refresh

  # Watch the checks of your latest push
  shub build-status my-repo --watch

  # Clone a repository into $WORKSPACE_HOME/<owner>/<name>
  shub clone kafji/shub

  # Copy merge settings between repositories
  shub copy-settings template-repo new-repo
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Command to run',
        required=False
    )

    # Dynamically add subcommands from registry
    for command_name, command_class in registry.get_all().items():
        command_parser = subparsers.add_parser(
            command_name,
            help=command_class.description,
            description=command_class.description
        )
        _add_common_args(command_parser)
        command_class.add_arguments(command_parser)

    return parser


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser.

    Args:
        parser: Parser to add arguments to
    """
    config_group = parser.add_argument_group('configuration')
    config_group.add_argument(
        '--username',
        help='GitHub username (overrides GITHUB_USERNAME)'
    )
    config_group.add_argument(
        '--token',
        help='GitHub token (overrides GITHUB_TOKEN)'
    )
    config_group.add_argument(
        '--database',
        metavar='PATH',
        help='Repository cache file (overrides SHUB_DATABASE)'
    )
    config_group.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show progress on the console'
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logging(command=args.command, verbose=args.verbose)

    try:
        config = Config.from_env_and_args(
            username=args.username,
            token=args.token,
            database_path=args.database,
            max_concurrency=getattr(args, 'workers', None),
            isolate_failures=getattr(args, 'isolate_failures', False)
        )

        logger.info("Configuration loaded")
        logger.info(f"  Username: {config.github_username}")
        logger.info(f"  Workspace: {config.workspace_root_dir}")
        logger.info(f"  Database: {config.database_path}")
        logger.info(f"  Authenticated: {config.is_authenticated}")

        command_class = registry.get(args.command)

        # Check if command requires token
        if command_class.requires_token and not config.is_authenticated:
            logger.error(
                f"Command '{args.command}' requires a GitHub token. "
                "Set GITHUB_TOKEN in .env or use --token"
            )
            return 1

        github_client = GitHubClient(
            username=config.github_username,
            token=config.github_token
        )

        command = command_class(config=config, github_client=github_client)
        return command.run(args)

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except ShubError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("\nCommand cancelled by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
