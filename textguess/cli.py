from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from textguess.config import ConfigSource
from textguess.guess.executor import guess_config
from textguess.router import available_guess_plugins, create_guess_plugins
from textguess.text.sample import SampleLimits, read_sample


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textguess",
        description="Guess parser settings from the leading bytes of a file and emit them as JSON.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the file to guess.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with the partial config to start from.",
    )
    parser.add_argument(
        "--plugin",
        action="append",
        choices=available_guess_plugins(),
        default=None,
        help="Guess plugin to run; repeat to run several (default: all, in order).",
    )
    parser.add_argument(
        "--sample-bytes",
        type=int,
        default=SampleLimits().sample_buffer_bytes,
        help="Number of leading bytes read as the sample.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"textguess: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    try:
        if args.sample_bytes <= 0:
            raise ValueError("--sample-bytes must be positive")
        config = (
            ConfigSource.from_json_file(args.config)
            if args.config is not None
            else ConfigSource()
        )
        sample = read_sample(
            args.path, limits=SampleLimits(sample_buffer_bytes=args.sample_bytes)
        )
        plugins = create_guess_plugins(args.plugin)
        guessed = guess_config(plugins, config, sample)
        json.dump(guessed.to_dict(), sys.stdout, ensure_ascii=False, sort_keys=True)
        sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"textguess: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
