"""Compile a host address and effective settings into an ssh argv."""

from __future__ import annotations

import logging as py_logging

from sshmux.errors import InvalidPort
from sshmux.ssh.settings import Settings

logger = py_logging.getLogger(__name__)

SSH_PROGRAM = "ssh"
DEFAULT_SSH_PORT = 22
MAX_PORT = 65535


def shell_quote_posix(value: str) -> str:
    if not value:
        return "''"
    return "'" + value.replace("'", "'\\''") + "'"


def _parse_port(raw: str) -> int | None:
    # An explicit "+" sign is accepted; "-" and non-ASCII digits are not.
    digits = raw[1:] if raw.startswith("+") else raw
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


def parse_bracket_host(address: str) -> tuple[str, int] | None:
    """Split a known_hosts style ``[host]:port`` address.

    Returns ``None`` when the address is not in bracket notation or the suffix
    is malformed, in which case callers use the address verbatim.
    """
    if not address.startswith("["):
        return None
    index = address.rfind("]:")
    if index < 0:
        return None
    host = address[1:index]
    if not host:
        return None
    port = _parse_port(address[index + 2 :])
    if port is None or port <= 0:
        return None
    return host, port


def _validated_port(port: int, address: str) -> int:
    if port < 0 or port > MAX_PORT:
        raise InvalidPort(f"invalid port {port} for {address}")
    return port


def build_ssh_command(host: str, settings: Settings) -> list[str]:
    address = host.strip()
    if not address:
        return [SSH_PROGRAM]

    port = settings.port
    bracketed = parse_bracket_host(address)
    if bracketed is not None:
        # The bracket port is the real one and always wins.
        address, port = bracketed
    port = _validated_port(port, host.strip())

    destination = f"{settings.user}@{address}" if settings.user else address

    command = [SSH_PROGRAM]
    if settings.identity_file:
        command.extend(["-i", settings.identity_file])
    if port and port != DEFAULT_SSH_PORT:
        command.extend(["-p", str(port)])
    command.extend(settings.extra_args)
    command.append(destination)

    remote_command = settings.remote_command.strip()
    if remote_command:
        # ssh joins trailing argv into one string for the login shell; send one token.
        command.append("sh -c " + shell_quote_posix(remote_command))

    logger.debug("Compiled ssh command host=%s argc=%s", host.strip(), len(command))
    return command
