#!/usr/bin/env python
"""CLI for the council transcript aligner."""

import argparse
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from council_transcript import TranscriptPipeline
from council_transcript.captions import CaptionParser, load_caption_payload
from council_transcript.core import TranscriptError


def cmd_align(args):
    """Align a caption track with an agenda file."""
    overrides = {}
    if args.simplified:
        overrides["output"] = {"format": "simplified"}
    if args.grace is not None:
        overrides["alignment"] = {"grace_window_seconds": args.grace}

    try:
        pipeline = TranscriptPipeline.from_config(
            config_path=args.config, env=args.env, config_dir=args.config_dir, overrides=overrides
        )
        result = pipeline.run(args.captions, args.agenda)
    except TranscriptError as e:
        print(f"✗ {e}")
        return 1

    output_path = Path(args.output) if args.output else pipeline.default_output_path(result.meeting_id)
    pipeline.builder.save_document(result.document, output_path)

    stats = result.stats
    print(f"\n✓ {result.meeting_id}: {len(result.segments)} segments → {output_path}")
    if result.video_available:
        print(f"  Speaker alignment: {stats.speaker_rate:.0%}")
        print(f"  Agenda alignment:  {stats.agenda_rate:.0%}")
        print(f"  Unique speakers:   {stats.unique_speakers}")
        for speaker in stats.speakers[:5]:
            print(f"    {speaker.name}: {speaker.segments} segments, {speaker.duration_seconds}s")
    for warning in result.validation.warnings:
        print(f"  ! {warning}")
    for issue in result.diagnostics:
        print(f"  - {issue}")
    return 0


def cmd_check_captions(args):
    """Validate a caption track and print cue statistics."""
    parser = CaptionParser()
    try:
        payload = load_caption_payload(args.captions)
    except TranscriptError as e:
        print(f"✗ {e}")
        return 1

    valid, errors = parser.validate(payload)
    parsed = parser.parse(payload)
    stats = parser.stats(parsed.cues)

    print(f"\n{'✓ valid' if valid else '✗ invalid'}: {args.captions}")
    print(f"  Cues: {stats.total_cues}")
    print(f"  Span: {stats.first_cue_start:.1f}s - {stats.last_cue_end:.1f}s")
    print(f"  Words: {stats.total_words} ({stats.average_words_per_cue:.1f}/cue)")
    for error in errors:
        print(f"  ✗ {error}")
    for issue in parsed.issues:
        print(f"  - {issue}")
    return 0 if valid else 1


def cmd_show_config(args):
    """Print the effective configuration."""
    pipeline = TranscriptPipeline.from_config(
        config_path=args.config, env=args.env, config_dir=args.config_dir
    )
    print(pipeline.config.model_dump_json(indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Council Transcript - align caption tracks with agenda speakers",
    )
    parser.add_argument("--env", "-e", default=None, help="Environment config to load")
    parser.add_argument("--config-dir", "-c", default="configs", help="Config directory")
    parser.add_argument("--config", help="Explicit config file")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Align
    p = subparsers.add_parser("align", help="Align captions with an agenda")
    p.add_argument("agenda", help="Agenda file (YAML or JSON)")
    p.add_argument("captions", nargs="?", help="Caption file or URL (omit for a future meeting)")
    p.add_argument("--output", "-o", help="Output JSON path")
    p.add_argument("--simplified", "-s", action="store_true", help="Write the simplified document")
    p.add_argument("--grace", type=float, help="Grace window in seconds")
    p.set_defaults(func=cmd_align)

    # Check captions
    p = subparsers.add_parser("check-captions", help="Validate a caption track")
    p.add_argument("captions", help="Caption file or URL")
    p.set_defaults(func=cmd_check_captions)

    # Show config
    p = subparsers.add_parser("show-config", help="Show effective configuration")
    p.set_defaults(func=cmd_show_config)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
