"""Command line flags for the update client."""

import argparse
from typing import Optional, Sequence

from update_client.errors import UsageError
from update_client.models.options import DEFAULT_PAYLOAD_URI, OptionSet


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports errors as UsageError instead of exiting 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="update-client",
        description="Update Engine Client",
        epilog=(
            "Exit status is 0 on success and 1 on usage errors, failed calls, "
            "or a failed update."
        ),
    )
    parser.add_argument(
        "--update",
        action="store_true",
        help="Start a new update, if no update in progress.",
    )
    parser.add_argument(
        "--payload",
        default=DEFAULT_PAYLOAD_URI,
        help="The URI to the update payload to use.",
    )
    parser.add_argument(
        "--headers",
        default="",
        help="A list of key-value pairs, one element of the list per line.",
    )
    parser.add_argument(
        "--suspend", action="store_true", help="Suspend an ongoing update and exit."
    )
    parser.add_argument(
        "--resume", action="store_true", help="Resume a suspended update."
    )
    parser.add_argument(
        "--cancel", action="store_true", help="Cancel the ongoing update and exit."
    )
    parser.add_argument(
        "--follow",
        action="store_true",
        help=(
            "Follow status update changes until a final state is reached. "
            "Exit status is 0 if the update succeeded, and 1 otherwise."
        ),
    )
    # Collected only so they can be rejected with a clear message.
    parser.add_argument("positional", nargs="*", help=argparse.SUPPRESS)
    return parser


def parse_options(argv: Optional[Sequence[str]] = None) -> OptionSet:
    """Parse ``argv`` into an OptionSet.

    Raises:
        UsageError: On unknown flags or malformed values
    """
    args = build_parser().parse_args(argv)
    return OptionSet(
        suspend=args.suspend,
        resume=args.resume,
        cancel=args.cancel,
        update=args.update,
        follow=args.follow,
        payload_uri=args.payload,
        headers=args.headers,
        positional=tuple(args.positional),
    )
