"""
Runner - Command Line Shell
===========================

Thin CLI around the message core. Prints JSON to stdout.

    python -m marketplace_messages operations
    python -m marketplace_messages schema IRDI
    python -m marketplace_messages evaluate IRDI --values '{"s1": 42}'
    python -m marketplace_messages generate callForProposal --user u1 --irdi IRDI --values '{...}'
    python -m marketplace_messages generate proposal --user u2 --original cfp.json --irdi IRDI --price 120

Exit codes:
    0  ok
    1  values rejected (evaluate)
    2  unknown message type, unknown IRDI or bad input
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from ..errors import MarketplaceMessagesError
from ..generation.generator import GenerationRequest, MessageGenerator
from .config import load_config

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


def _json_arg(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}")


def _number(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketplace-messages",
        description="Negotiation message generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  marketplace-messages operations
  marketplace-messages schema 0173-1#01-AAO742#002
  marketplace-messages generate callForProposal --user did:peer:buyer \\
      --irdi 0173-1#01-AAO742#002 --values '{"0173-1#02-AAB120#004": 30}'
""",
    )
    parser.add_argument("--config", type=str, help="Config file path")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("operations", help="List available operations")

    schema = commands.add_parser("schema", help="Show the negotiable elements of a capability")
    schema.add_argument("irdi")

    evaluate = commands.add_parser("evaluate", help="Check values against a capability")
    evaluate.add_argument("irdi")
    evaluate.add_argument("--values", type=_json_arg, default={}, help="JSON object semanticId -> value")

    generate = commands.add_parser("generate", help="Generate a message")
    generate.add_argument("message_type")
    generate.add_argument("--user", dest="user_id", help="Sender id")
    generate.add_argument("--irdi")
    generate.add_argument("--values", type=_json_arg, default={}, help="JSON object semanticId -> value")
    generate.add_argument("--reply-time", type=float, help="Minutes until the reply deadline")
    generate.add_argument("--original", type=Path, help="JSON file with the message to continue")
    generate.add_argument("--price", type=_number)
    generate.add_argument("--location")
    generate.add_argument("--start", dest="start_timestamp", type=int)
    generate.add_argument("--end", dest="end_timestamp", type=int)
    generate.add_argument("--creation-date", type=int)
    generate.add_argument("--user-name")

    return parser


def _generate(generator: MessageGenerator, args: argparse.Namespace) -> int:
    original = None
    if args.original is not None:
        with open(args.original, encoding="utf-8") as f:
            original = json.load(f)

    message = generator.generate(GenerationRequest(
        message_type=args.message_type,
        user_id=args.user_id,
        irdi=args.irdi,
        submodel_values=args.values,
        reply_time=args.reply_time,
        original_message=original,
        price=args.price,
        location=args.location,
        start_timestamp=args.start_timestamp,
        end_timestamp=args.end_timestamp,
        creation_date=args.creation_date,
        user_name=args.user_name,
    ))
    if message is None:
        print(f"[Runner] Unrecognized message type: {args.message_type}", file=sys.stderr)
        return EXIT_ERROR

    _print_json(message.to_dict())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        generator = MessageGenerator.from_config(load_config(args.config))

        if args.command == "operations":
            _print_json(generator.catalog.operations())
            return EXIT_OK

        if args.command == "schema":
            _print_json([e.to_dict() for e in generator.catalog.schema_for(args.irdi)])
            return EXIT_OK

        if args.command == "evaluate":
            result = generator.evaluator.evaluate(args.irdi, args.values)
            print(result.status)
            return EXIT_OK if result.ok else EXIT_REJECTED

        return _generate(generator, args)

    except (MarketplaceMessagesError, OSError, json.JSONDecodeError) as e:
        print(f"[Runner] Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
