"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import json
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import AppConfig, config_hosts, find_group, group_listing, load_config
from .connect import ConnectRequest, connect
from .errors import ExitCode, SshMuxError, user_facing_error
from .logging import LOG_LEVELS, configure_logging, default_log_path, normalize_level
from .process import ExecRequest, exec_replace
from .tmux.client import TmuxClient

_CONNECT_TARGETS = {"host": "host", "h": "host", "group": "group", "g": "group"}
_LIST_TARGETS = {"hosts": "hosts", "h": "hosts", "groups": "groups", "g": "groups"}


def _log_level_type(value: str) -> str:
    try:
        return normalize_level(value)
    except ValueError as exc:
        accepted = ", ".join(LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sshmux",
        description="Open ssh sessions to configured hosts and groups, in place or inside tmux.",
    )
    parser.add_argument("--config", type=Path, default=None, help="path to config.toml")
    parser.add_argument("--no-tmux", action="store_true", help="disable tmux integration")
    parser.add_argument(
        "--window-per-host",
        action="store_true",
        default=None,
        help="open one tmux window per host instead of one split window",
    )
    parser.add_argument("--log-level", type=_log_level_type, default="WARN")
    parser.add_argument("--log-file", type=Path, default=None)

    commands = parser.add_subparsers(dest="command", metavar="{connect,list}")

    connect_parser = commands.add_parser("connect", aliases=["c"], help="connect to a host or group")
    connect_parser.add_argument("target", choices=sorted(_CONNECT_TARGETS))
    connect_parser.add_argument("name")
    connect_parser.add_argument("--command", dest="remote_command", default="", help="run once on connect")
    connect_parser.add_argument(
        "--keep-open",
        action="store_true",
        help="keep an interactive shell after --command finishes",
    )

    list_parser = commands.add_parser("list", aliases=["l"], help="print hosts or groups")
    list_parser.add_argument("target", choices=sorted(_LIST_TARGETS))
    list_parser.add_argument("--json", action="store_true", help="output as JSON")
    list_parser.add_argument("--all", action="store_true", dest="include_hidden", help="include hidden hosts")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _connect_request(namespace: argparse.Namespace, config: AppConfig) -> ConnectRequest:
    target = _CONNECT_TARGETS[namespace.target]
    common = {
        "remote_command": namespace.remote_command,
        "keep_open": namespace.keep_open,
        "no_tmux": namespace.no_tmux,
        "window_per_host": namespace.window_per_host,
    }
    if target == "host":
        return ConnectRequest(hosts=[namespace.name], **common)

    group = find_group(config, namespace.name)
    if group is None:
        raise SshMuxError(
            f"group {namespace.name!r} not found",
            code=ExitCode.VALIDATION_ERROR,
            hint="Run `sshmux list groups` to see configured groups.",
        )
    if not group.hosts:
        raise SshMuxError(f"group {group.name!r} has no hosts", code=ExitCode.VALIDATION_ERROR)
    return ConnectRequest(hosts=list(group.hosts), group=group, **common)


def run_connect(
    namespace: argparse.Namespace,
    config: AppConfig,
    *,
    executor: Callable[[ExecRequest], None] = exec_replace,
    client: TmuxClient | None = None,
) -> int:
    outcome = connect(config, _connect_request(namespace, config), client=client)
    if isinstance(outcome, ExecRequest):
        executor(outcome)
        return int(ExitCode.SUCCESS)
    print(outcome.message, file=sys.stderr)
    return int(ExitCode.SUCCESS)


def run_list(namespace: argparse.Namespace, config: AppConfig) -> int:
    target = _LIST_TARGETS[namespace.target]
    if target == "groups":
        if namespace.json:
            print(json.dumps(group_listing(config), indent=2))
        else:
            for group in config.groups:
                print(f"{group.name} ({len(group.hosts)} hosts)")
        return int(ExitCode.SUCCESS)

    hosts = config_hosts(config, include_hidden=namespace.include_hidden)
    if namespace.json:
        print(json.dumps(hosts, indent=2))
    else:
        for host in hosts:
            print(host)
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    executor: Callable[[ExecRequest], None] = exec_replace,
    client: TmuxClient | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging()
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.command is None:
        parser.print_usage(sys.stderr)
        return int(ExitCode.INVALID_ARGS)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        config = load_config(namespace.config)
        if namespace.command in ("list", "l"):
            return run_list(namespace, config)
        logger.debug("Starting connect flow target=%s name=%s", namespace.target, namespace.name)
        return run_connect(namespace, config, executor=executor, client=client)
    except SshMuxError as exc:
        logger.debug(
            "Handled SshMuxError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
