"""
Command registration and parser construction for the ``parpass`` CLI.

Handlers register themselves with ``CommandRegistry.register``; options are
plain dicts of ``argparse.add_argument`` keywords plus a ``name`` and an
optional ``validator`` run after parsing.
"""

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum, auto
from functools import cached_property
from typing import Any

from parpass.api.parpass_api import ParPassAPI
from parpass.api.recommendation_api import RecommendationAPI
from parpass.config.types import AppConfig
from parpass.services.credential_store import FileCredentialStore
from parpass.services.session_service import SessionContext


Option = dict[str, Any]
Handler = Callable[['CLIContext'], int]

@dataclass
class CLIContext:
    """Everything a command handler needs, collaborators built on first use.

    ``overrides`` may hold a prebuilt ``api``, ``recommender`` or ``store``.
    """
    args: argparse.Namespace
    logger: logging.Logger
    config: AppConfig
    parser: argparse.ArgumentParser
    overrides: dict[str, Any] = field(default_factory=dict)

    @cached_property
    def api(self) -> ParPassAPI:
        return self.overrides.get('api') or ParPassAPI(self.config.api_url, timeout=self.config.request_timeout)

    @cached_property
    def recommender(self) -> RecommendationAPI:
        return self.overrides.get('recommender') or RecommendationAPI(self.config.recommendation_url)

    @cached_property
    def session(self) -> SessionContext:
        store = self.overrides.get('store') or FileCredentialStore(self.config.credentials_file)
        return SessionContext(self.api, store)

class CommandCategory(Enum):
    """Audience of a command, used to order the help listing."""
    SESSION = auto()
    COURSES = auto()
    FAVORITES = auto()
    HISTORY = auto()
    REVIEWS = auto()
    STATS = auto()

@dataclass
class CommandMetadata:
    name: str
    help_text: str
    category: CommandCategory
    handler: Handler
    options: list[Option]
    parent_command: str | None = None

    @property
    def key(self) -> str:
        return f"{self.parent_command} {self.name}" if self.parent_command else self.name

class CLIOptionFactory:
    """Options shared by several commands."""

    @staticmethod
    def create_format_option() -> Option:
        return {
            'name': '--format',
            'choices': ['text', 'json'],
            'default': 'text',
            'help': 'Print tables (text) or JSON (default: text)'
        }

    @staticmethod
    def create_tier_option() -> Option:
        return {
            'name': '--tier',
            'choices': ['all', 'core', 'premium'],
            'default': 'all',
            'help': 'Only show courses requiring this tier (default: all)'
        }

    @staticmethod
    def create_course_argument() -> Option:
        return {
            'name': 'course_id',
            'help': 'Course id, as shown by "parpass courses list"',
            'validator': lambda value: bool(value.strip())
        }

    @staticmethod
    def create_positive_int_option(name: str, default: int, help_text: str) -> Option:
        return {
            'name': name,
            'type': int,
            'default': default,
            'help': f"{help_text} (default: {default})",
            'validator': lambda value: value > 0
        }

class CommandRegistry:
    """Process-wide table of commands, keyed by ``"group name"`` or ``"name"``."""

    _commands: dict[str, CommandMetadata] = {}
    _group_help: dict[str, str] = {}

    @classmethod
    def clear(cls) -> None:
        cls._commands.clear()
        cls._group_help.clear()

    @classmethod
    def register(
        cls,
        name: str,
        help_text: str,
        category: CommandCategory,
        options: list[Option] | None = None,
        parent_command: str | None = None
    ) -> Callable[[Handler], Handler]:
        """Decorator registering a handler under ``name``, or ``parent_command name``."""
        def decorator(handler: Handler) -> Handler:
            command = CommandMetadata(
                name=name,
                help_text=help_text,
                category=category,
                handler=handler,
                options=options or [],
                parent_command=parent_command
            )
            cls._commands[command.key] = command
            return handler
        return decorator

    @classmethod
    def register_group(cls, name: str, help_text: str) -> None:
        cls._group_help[name] = help_text

    @classmethod
    def group_help(cls, name: str) -> str:
        return cls._group_help.get(name, f"{name.capitalize()} commands")

    @classmethod
    def commands(cls) -> list[CommandMetadata]:
        """Registered commands in help order."""
        return sorted(cls._commands.values(), key=lambda command: command.category.value)

    @classmethod
    def get_command(cls, name: str, subcommand: str | None = None) -> CommandMetadata | None:
        return cls._commands.get(f"{name} {subcommand}" if subcommand else name)

    @classmethod
    def get_subcommands(cls, parent_command: str) -> list[str]:
        return [c.name for c in cls._commands.values() if c.parent_command == parent_command]

def _dest(option: Option) -> str:
    return option['name'].lstrip('-').replace('-', '_')

def validate_arguments(args: argparse.Namespace, command: CommandMetadata) -> list[str]:
    """Run option validators argparse cannot express; returns error messages."""
    errors = []
    for option in command.options:
        validator = option.get('validator')
        value = getattr(args, _dest(option), None)
        if validator is None or value is None:
            continue
        try:
            valid = bool(validator(value))
        except (TypeError, ValueError, AttributeError):
            valid = False
        if not valid:
            errors.append(f"Invalid value for {option['name']}: {value!r}")
    return errors

def add_common_options(parser: argparse.ArgumentParser) -> None:
    """Options accepted before any command."""
    parser.add_argument(
        '--config-dir',
        help='Directory holding config.yaml (default: $PARPASS_CONFIG_DIR)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log debug output to stderr'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )

class CLIBuilder:
    """Turns registered commands into an argparse parser."""

    def __init__(self, description: str):
        self.parser = argparse.ArgumentParser(prog='parpass', description=description)
        add_common_options(self.parser)
        self._commands = self.parser.add_subparsers(dest='command', required=True, metavar='COMMAND')
        self._groups: dict[str, Any] = {}
        self._seen: set[str] = set()

    def _group(self, name: str) -> Any:
        if name not in self._groups:
            group_parser = self._commands.add_parser(name, help=CommandRegistry.group_help(name))
            self._groups[name] = group_parser.add_subparsers(
                dest='subcommand',
                required=True,
                metavar='SUBCOMMAND'
            )
        return self._groups[name]

    def add_command(self, command: CommandMetadata) -> None:
        """Add one command; adding the same command twice is a no-op."""
        if command.key in self._seen:
            return
        self._seen.add(command.key)

        container = self._group(command.parent_command) if command.parent_command else self._commands
        parser = container.add_parser(command.name, help=command.help_text)
        for option in command.options:
            kwargs = {k: v for k, v in option.items() if k not in ('name', 'validator')}
            parser.add_argument(option['name'], **kwargs)
        parser.set_defaults(func=command.handler)

    def build(self) -> argparse.ArgumentParser:
        return self.parser

def create_command_group(name: str, help_text: str) -> Callable[[type[Any]], type[Any]]:
    """Class decorator naming a group of commands.

    The help text is shown for the group's parent command when its
    handlers register with ``parent_command=name``.
    """
    def decorator(cls: type[Any]) -> type[Any]:
        CommandRegistry.register_group(name, help_text)
        cls.group_name = name
        return cls
    return decorator
