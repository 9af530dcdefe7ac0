from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from . import feedback
from .audio import SAMPLE_RATE, duration_seconds
from .config import load_score
from .errors import NoteSynthError
from .logging_utils import configure_logging, log_exception
from .sequencer import TimelineRenderer, build_renderer
from .spinner import Spinner, render_error
from .wav import HEADER_SIZE, parse_wav_header, read_wav, write_wav

_LOGGER = logging.getLogger("notesynth.cli")
_CONSOLE = Console()
_DEFAULT_OUTPUT_DIR = "output"


def default_output_path(input_file: Path, output_dir: Path) -> Path:
    return output_dir / f"{input_file.stem}.wav"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notesynth", description="A WAV file generator from JSON music notation."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a JSON score to a WAV file.")
    render.add_argument("input_file", type=Path, metavar="INPUT_FILE")
    render.add_argument("--output", type=Path, default=None, help="Explicit output path.")
    render.add_argument("--output-dir", type=Path, default=Path(_DEFAULT_OUTPUT_DIR))
    render.add_argument("--sample-rate", type=int, default=SAMPLE_RATE)

    inspect = sub.add_parser("inspect", help="Show the header of a WAV file.")
    inspect.add_argument("wav_file", type=Path, metavar="WAV_FILE")
    return parser


def _run_render(args: argparse.Namespace) -> int:
    if args.sample_rate <= 0:
        raise NoteSynthError(f"Sample rate must be positive, got {args.sample_rate}")
    score = load_score(args.input_file)
    renderer = build_renderer(score)
    strategy = "timeline" if isinstance(renderer, TimelineRenderer) else "sequential"
    waveform = "bezier" if renderer.uses_shaped_waveform() else "sine"
    _LOGGER.info("Rendering %s with the %s strategy", args.input_file, strategy)
    feedback.info(f"Using {strategy} orchestrator with {waveform} waveform")
    feedback.processing(f"Rendering {renderer.note_count()} notes at {args.sample_rate} Hz")

    with Spinner("Rendering audio"):
        samples = renderer.render(args.sample_rate)

    target = args.output or default_output_path(args.input_file, args.output_dir)
    path = write_wav(target, samples, args.sample_rate)
    seconds = duration_seconds(samples.size, args.sample_rate)
    feedback.success(f"Wrote {samples.size} samples ({seconds:.2f}s) to {path}")
    return 0


def _run_inspect(args: argparse.Namespace) -> int:
    path: Path = args.wav_file
    with path.open("rb") as handle:
        header = parse_wav_header(handle.read(HEADER_SIZE))
    samples, sample_rate = read_wav(path)

    table = Table(title=str(path), show_header=False)
    table.add_row("Channels", str(header.channels))
    table.add_row("Sample rate", f"{sample_rate} Hz")
    table.add_row("Bit depth", f"{header.bits_per_sample} bits")
    table.add_row("Samples", str(samples.size))
    table.add_row("Duration", f"{duration_seconds(samples.size, sample_rate):.3f}s")
    _CONSOLE.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        if args.command == "render":
            return _run_render(args)
        if args.command == "inspect":
            return _run_inspect(args)

        parser.print_help()
        return 1
    except (NoteSynthError, OSError) as exc:
        log_exception("notesynth CLI", exc)
        render_error("notesynth CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
