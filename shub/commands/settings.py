"""Merge settings commands: view, apply and copy repository settings."""

import argparse
import logging

import tomlkit
from tomlkit.exceptions import ParseError

from .base import Command
from ..core.types import PartialRepoId, RepoId, RepositorySettings

logger = logging.getLogger('shub')


def _target(args: argparse.Namespace, command: Command, attr: str = 'repo') -> RepoId:
    return getattr(args, attr).complete(command.config.github_username)


class SettingsCommand(Command):
    """Print (or save) the merge settings of a repository as TOML."""

    name = "settings"
    description = "Show merge settings of a repository"

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            'repo',
            type=PartialRepoId.parse,
            help='Repository as NAME or OWNER/NAME'
        )
        parser.add_argument(
            '--output', '-o',
            metavar='FILE',
            help='Write settings to FILE instead of stdout'
        )

    def run(self, args: argparse.Namespace) -> int:
        repo_id = _target(args, self)
        settings = RepositorySettings.from_api(self.github_client.get_repository(repo_id))
        text = tomlkit.dumps(settings.to_dict())

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(text)
            logger.info(f"Saved settings of {repo_id} to {args.output}")
        else:
            self.write(text.rstrip('\n'))
        return 0


class ApplySettingsCommand(Command):
    """Apply merge settings from a TOML file to repositories."""

    name = "apply-settings"
    description = "Apply merge settings from a TOML file"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            'file',
            help='TOML file as written by `shub settings --output`'
        )
        parser.add_argument(
            'repos',
            nargs='+',
            type=PartialRepoId.parse,
            metavar='REPO',
            help='Repositories to update'
        )

    def run(self, args: argparse.Namespace) -> int:
        try:
            with open(args.file, 'r', encoding='utf-8') as f:
                data = tomlkit.load(f).unwrap()
        except ParseError as e:
            raise ValueError(f"{args.file} is not valid TOML: {e}") from e
        settings = RepositorySettings.from_dict(data)

        for partial in args.repos:
            repo_id = partial.complete(self.config.github_username)
            self.github_client.update_repository(repo_id, settings.to_dict())
            self.write(f"Applied settings to {repo_id}.")
        return 0


class CopySettingsCommand(Command):
    """Copy merge settings from one repository to another."""

    name = "copy-settings"
    description = "Copy merge settings between repositories"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            'source',
            type=PartialRepoId.parse,
            metavar='FROM',
            help='Repository to read settings from'
        )
        parser.add_argument(
            'target',
            type=PartialRepoId.parse,
            metavar='TO',
            help='Repository to write settings to'
        )

    def run(self, args: argparse.Namespace) -> int:
        source = _target(args, self, 'source')
        target = _target(args, self, 'target')

        settings = RepositorySettings.from_api(self.github_client.get_repository(source))
        self.github_client.update_repository(target, settings.to_dict())
        self.write(f"Copied settings from {source} to {target}.")
        return 0
