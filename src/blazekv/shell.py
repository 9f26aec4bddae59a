"""
Line-oriented command prompt driving a ``TransactionalStore``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from .config import RollbackPolicy, StoreConfig
from .errors import CommandError, KeyStoreError
from .persistence import TransactionalStore
from .utils import configure_logging, get_logger
from .utils.logging import set_correlation_id

DEFAULT_PROMPT = "> "


def parse_int(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise CommandError(f"Unable to parse {raw} as int, try again") from exc


def _require_key(command: str, args: List[str]) -> str:
    if not args:
        raise CommandError(f"Please provide an argument for {command} (the key)")
    return args[0]


class CommandShell:
    """
    Parses one command per line and applies it to the store.

    Values are integers; keys are arbitrary whitespace-free strings.
    """

    def __init__(
        self,
        store: Optional[TransactionalStore[str, int]] = None,
        *,
        out: Optional[TextIO] = None,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        self.store: TransactionalStore[str, int] = store if store is not None else TransactionalStore()
        self.out = out or sys.stdout
        self.prompt = prompt
        self.logger = get_logger("shell")
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "SET": self._set,
            "GET": self._get,
            "DELETE": self._delete,
            "COUNT": self._count,
            "BEGIN": lambda args: self.store.begin(),
            "END": lambda args: self.store.end(),
            "ROLLBACK": lambda args: self.store.rollback(),
            "COMMIT": lambda args: self.store.commit(),
        }

    def execute(self, line: str) -> bool:
        """
        Run a single command. Returns ``False`` once ``EXIT`` is seen.
        """

        parts = line.split()
        if not parts:
            return True
        command, args = parts[0], parts[1:]
        if command == "EXIT":
            return False
        handler = self._commands.get(command)
        if handler is None:
            self.logger.debug("Ignored unknown command %r", command)
            return True
        try:
            handler(args)
        except KeyStoreError as exc:
            self._write(f"ERROR: {exc}")
        return True

    def run(self, stream: TextIO) -> int:
        while True:
            self.out.write(self.prompt)
            self.out.flush()
            line = stream.readline()
            if not line:
                break
            if not self.execute(line):
                break
        return 0

    # ------------------------------------------------------------------ #
    def _set(self, args: List[str]) -> None:
        if len(args) < 2:
            raise CommandError("Please provide arguments for SET (the key and the value)")
        self.store.set(args[0], parse_int(args[1]))

    def _get(self, args: List[str]) -> None:
        value, found = self.store.get(_require_key("GET", args))
        if found:
            self._write(str(value))

    def _delete(self, args: List[str]) -> None:
        self.store.delete(_require_key("DELETE", args))

    def _count(self, args: List[str]) -> None:
        self._write(str(self.store.count()))

    def _write(self, text: str) -> None:
        self.out.write(text + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blazekv",
        description="Interactive prompt for an in-memory transactional key-value store.",
    )
    parser.add_argument("--prompt", default=DEFAULT_PROMPT, help="Prompt printed before each command.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for the blazekv logger.",
    )
    parser.add_argument(
        "--outermost-rollback",
        choices=[policy.value for policy in RollbackPolicy],
        default=None,
        help="Behaviour of ROLLBACK at the outermost level (overrides BLAZEKV_OUTERMOST_ROLLBACK).",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(getattr(logging, args.log_level))
    logging.getLogger("blazekv").setLevel(getattr(logging, args.log_level))
    set_correlation_id()

    overrides = {}
    if args.outermost_rollback:
        overrides["outermost_rollback"] = args.outermost_rollback
    try:
        config = StoreConfig.from_env(**overrides)
    except KeyStoreError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    shell = CommandShell(TransactionalStore(config=config), out=stdout, prompt=args.prompt)
    shell.logger.info("Starting prompt with %s", config.describe())
    return shell.run(stdin or sys.stdin)
