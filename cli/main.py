from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from app.container import build_container
from app.settings import build_settings
from cli.output import (
    action_payload,
    candidate_payload,
    print_candidates,
    print_json,
    print_segments,
    segments_payload,
)
from config.logging_config import configure_logging, get_logger

_log = get_logger(__name__)


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    original = parser.add_mutually_exclusive_group(required=True)
    original.add_argument("--original", default=None)
    original.add_argument("--original-file", default=None)

    updated = parser.add_mutually_exclusive_group(required=True)
    updated.add_argument("--updated", default=None)
    updated.add_argument("--updated-file", default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="textdiff")
    sub = parser.add_subparsers(dest="command", required=True)

    segments = sub.add_parser("segments")
    _add_input_arguments(segments)
    segments.add_argument("--mode", choices=["token", "character"], default=None)
    segments.add_argument("--json", action="store_true")
    segments.add_argument("--no-color", action="store_true")

    candidates = sub.add_parser("candidates")
    _add_input_arguments(candidates)
    candidates.add_argument("--json", action="store_true")

    revert = sub.add_parser("revert")
    _add_input_arguments(revert)
    revert.add_argument("--id", type=int, required=True)
    revert.add_argument("--json", action="store_true")

    revert_all = sub.add_parser("revert-all")
    _add_input_arguments(revert_all)

    export = sub.add_parser("export-docx")
    _add_input_arguments(export)
    export.add_argument("--out", required=True)
    export.add_argument("--mode", choices=["token", "character"], default=None)
    export.add_argument("--heading", default=None)

    return parser


def _read_inputs(args: argparse.Namespace, deps: dict[str, Any]) -> tuple[str, str]:
    loader = deps["document_input_service"]
    original = args.original if args.original is not None else loader.load(args.original_file).text
    updated = args.updated if args.updated is not None else loader.load(args.updated_file).text
    return original, updated


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        app_cfg = build_settings()
        configure_logging(app_cfg.run_config.log_level, app_cfg.run_config.json_logs)
        deps = build_container(app_cfg)
        diff_service = deps["diff_service"]

        original, updated = _read_inputs(args, deps)
        _log.info("command_started", command=args.command)

        if args.command == "segments":
            segments = diff_service.compute(original, updated, args.mode)
            if args.json:
                print_json(segments_payload(segments))
            else:
                print_segments(segments, color=not args.no_color and sys.stdout.isatty())
            return 0

        if args.command == "candidates":
            candidates = diff_service.candidates(original, updated, "token")
            if args.json:
                print_json([candidate_payload(c) for c in candidates])
            else:
                print_candidates(candidates)
            return 0

        if args.command == "revert":
            action = diff_service.revert(original, updated, args.id, "token")
            if action is None:
                print(f"Error: no applicable revert candidate with id {args.id}")
                return 1
            if args.json:
                print_json(action_payload(action))
            else:
                print(action.resulting_updated)
            return 0

        if args.command == "revert-all":
            print(diff_service.revert_all(original, updated))
            return 0

        if args.command == "export-docx":
            segments = diff_service.compute(original, updated, args.mode)
            written = deps["docx_out_service"].write_tracked_changes(
                output_path=args.out,
                segments=segments,
                heading=args.heading,
            )
            print(f"Wrote {written}")
            return 0

        parser.error(f"Unknown command: {args.command}")
        return 2
    except Exception as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
