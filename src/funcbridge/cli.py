"""
Command-line interface for funcbridge.

Decodes an invocation envelope captured from the function host (for
example with a request logger in front of the custom handler) so a
handler author can see exactly what their trigger object will contain.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from funcbridge.bootstrap import load_builtin_triggers
from funcbridge.core.logger import configure_root_logger, get_logger, push_invocation_id, reset_invocation_id
from funcbridge.core.options import TriggerOption, with_name
from funcbridge.triggers.registry import TriggerRegistry, new_trigger

logger = get_logger(__name__)


def decode_file(kind: str, envelope_path: str, *, name: Optional[str] = None) -> Any:
    """
    Decode the envelope stored at ``envelope_path`` as a ``kind`` trigger.

    Args:
        kind: Registered trigger kind (http, timer, queue, base)
        envelope_path: Path to a JSON envelope file
        name: Binding name, when it differs from the kind's default

    Returns:
        The decoded trigger

    Raises:
        FileNotFoundError: If the envelope file doesn't exist
        TriggerRegistryError: If no trigger is registered for ``kind``
        TriggerPayloadMalformedError: If the envelope does not decode
    """
    envelope_file = Path(envelope_path)
    if not envelope_file.exists():
        raise FileNotFoundError(f"Envelope file not found: {envelope_path}")

    options: list[TriggerOption] = []
    if name:
        options.append(with_name(name))

    trigger = new_trigger(kind, open(envelope_file, "rb"), *options)

    rand_guid = _rand_guid(trigger)
    token = push_invocation_id(rand_guid)
    try:
        logger.info(f"Decoded {kind} trigger from {envelope_path}")
    finally:
        reset_invocation_id(token)

    return trigger


def _rand_guid(trigger: Any) -> Optional[str]:
    metadata = getattr(trigger, "metadata", None)
    sys_block = getattr(metadata, "sys", None)
    return getattr(sys_block, "rand_guid", None)


def cli(argv: Optional[list[str]] = None) -> None:
    """
    Command-line interface for funcbridge.

    Supports subcommands:
    - decode: Decode an envelope and print the trigger as JSON
    - validate: Check that an envelope decodes

    Usage:
        funcbridge decode http /path/to/envelope.json
        funcbridge validate timer /path/to/envelope.json
    """
    load_builtin_triggers()

    parser = argparse.ArgumentParser(
        prog="funcbridge",
        description="Decode function host invocation envelopes",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute"
    )

    for command, help_text in (
        ("decode", "Decode an envelope and print the trigger as JSON"),
        ("validate", "Check that an envelope decodes"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("kind", choices=TriggerRegistry.kinds(), help="Trigger kind")
        sub.add_argument("envelope", help="Path to the JSON envelope file")
        sub.add_argument("--name", help="Binding name in function.json")
        sub.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable verbose logging"
        )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        configure_root_logger("DEBUG")

    try:
        trigger = decode_file(args.kind, args.envelope, name=args.name)
    except Exception as e:
        logger.error(f"Decode failed: {e}")
        sys.exit(1)

    if args.command == "decode":
        print(trigger.model_dump_json(indent=2))
    sys.exit(0)


if __name__ == "__main__":
    cli()
