# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command registry mapping names to in-process handlers."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass

from .config import MasterMoldConfig
from .errors import CommandNotFoundError
from .interfaces import CommandHandler, DispatchLogger, SubcommandDelegate


@dataclass(frozen=True, slots=True)
class FunctionHandler:
    """Adapt a plain callable to the :class:`CommandHandler` protocol."""

    func: Callable[[Sequence[str]], None]

    def execute(self, args: Sequence[str]) -> None:
        """Invoke the wrapped callable with ``args``."""

        self.func(args)


class CommandRegistry(Mapping[str, CommandHandler]):
    """Dispatch table for dispatcher commands.

    ``CommandRegistry`` behaves like a read-only mapping of command names to
    handlers. Names without a handler are forwarded to the subcommand
    delegate supplied at construction; without a delegate they fail with
    :class:`CommandNotFoundError`. Handlers may only be registered before the
    first dispatch.
    """

    def __init__(
        self,
        config: MasterMoldConfig,
        logger: DispatchLogger,
        *,
        delegate: SubcommandDelegate | None = None,
    ) -> None:
        """Initialise an empty registry.

        Args:
            config: Effective configuration shared with handlers.
            logger: Logger receiving dispatch records.
            delegate: Fallback for names without an in-process handler.
        """

        self._config = config
        self._logger = logger
        self._delegate = delegate
        self._handlers: dict[str, CommandHandler] = {}
        self._dispatching = False

    @property
    def config(self) -> MasterMoldConfig:
        """Return the configuration handed to the registry."""

        return self._config

    @property
    def logger(self) -> DispatchLogger:
        """Return the logger handed to the registry."""

        return self._logger

    @property
    def delegate(self) -> SubcommandDelegate | None:
        """Return the subcommand delegate, or ``None`` when none is configured."""

        return self._delegate

    def register(self, name: str, handler: CommandHandler) -> None:
        """Register ``handler`` under ``name``.

        Args:
            name: Command name typed after the dispatcher.
            handler: In-process implementation.

        Raises:
            RuntimeError: If dispatch has already started.
            ValueError: If ``name`` is already registered.
        """

        if self._dispatching:
            raise RuntimeError(f"cannot register '{name}' after dispatch has started")
        if name in self._handlers:
            raise ValueError(f"Command '{name}' already registered")
        self._handlers[name] = handler

    def register_func(self, name: str, func: Callable[[Sequence[str]], None]) -> None:
        """Register a plain callable as the handler for ``name``."""

        self.register(name, FunctionHandler(func))

    def try_get(self, name: str) -> CommandHandler | None:
        """Return the handler for ``name`` when registered, otherwise ``None``."""

        return self._handlers.get(name)

    def execute(self, name: str, args: Sequence[str]) -> None:
        """Dispatch ``name`` with ``args``.

        Args:
            name: Command name.
            args: Arguments forwarded to the handler or binary.

        Raises:
            CommandNotFoundError: If no handler matches and no delegate is set.
            MasterMoldError: Any failure raised by the handler or delegate.
        """

        self._dispatching = True
        handler = self._handlers.get(name)
        if handler is not None:
            self._logger.debug(f"executing command command={name}")
            handler.execute(args)
            return
        if self._delegate is None:
            raise CommandNotFoundError(name)
        self._delegate(name, args)

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __getitem__(self, name: str) -> CommandHandler:
        return self._handlers[name]


__all__ = ["CommandRegistry", "FunctionHandler"]
