"""Main entry point for the SeaTuner CLI."""

import sys
import argparse
import threading
from typing import Any, Dict, List, Optional

from ..audio.sources import AudioSource, WavFileAudioSource
from ..core.config import ConfigManager
from ..detection.period_estimator import PeriodEstimator
from ..errors import TunerError
from ..logger import get_logger
from ..logging_config import setup_logging
from ..note_matcher import NoteMatcher
from ..tuner_loop import TunerLoop
from ..ui.console import ConsoleDisplay

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sea-tuner", description="SeaTuner - monophonic pitch tuner"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    listen_parser = subparsers.add_parser("listen", help="Tune from a live input device")
    listen_parser.add_argument(
        "--device", type=int, default=None, help="Audio input device ID"
    )
    listen_parser.add_argument(
        "--sample-rate", type=int, default=None, help="Audio sample rate in Hz"
    )
    listen_parser.add_argument(
        "--window", type=int, default=None, help="Samples per analysis window"
    )
    listen_parser.add_argument(
        "--delay", type=float, default=None, help="Pause between cycles in seconds"
    )
    listen_parser.add_argument(
        "--ui",
        choices=["console", "pygame"],
        default="console",
        help="Display to use (default: console)",
    )
    listen_parser.add_argument(
        "--config-dir", default=None, help="Configuration directory (default: ~/.config/sea_tuner)"
    )

    analyze_parser = subparsers.add_parser("analyze", help="Tune every window of a sound file")
    analyze_parser.add_argument("path", help="Sound file to analyse")
    analyze_parser.add_argument(
        "--window", type=int, default=None, help="Samples per analysis window"
    )
    analyze_parser.add_argument(
        "--config-dir", default=None, help="Configuration directory (default: ~/.config/sea_tuner)"
    )

    subparsers.add_parser("devices", help="List audio input devices")
    return parser


def resolve_settings(
    config_manager: ConfigManager, args: argparse.Namespace
) -> Dict[str, Any]:
    """Merge stored configuration with command line overrides."""
    return config_manager.settings(
        device_id=getattr(args, "device", None),
        sample_rate=getattr(args, "sample_rate", None),
        window_size=getattr(args, "window", None),
        cycle_delay=getattr(args, "delay", None),
    )


def create_loop(
    source: AudioSource, settings: Dict[str, Any], cycle_delay: Optional[float] = None
) -> TunerLoop:
    return TunerLoop(
        source,
        window_size=settings["window_size"],
        cycle_delay=settings["cycle_delay"] if cycle_delay is None else cycle_delay,
        estimator=PeriodEstimator(trough_ratio=settings["trough_ratio"]),
        matcher=NoteMatcher(half_range=settings["half_range"]),
    )


def run_listen(args: argparse.Namespace) -> int:
    from ..audio.live import LiveAudioSource

    settings = resolve_settings(ConfigManager(args.config_dir), args)
    source = LiveAudioSource(
        device_id=settings["device_id"], sample_rate=settings["sample_rate"]
    )
    loop = create_loop(source, settings)
    # Device and configuration errors surface here, before the loop starts
    source.open()

    try:
        if args.ui == "pygame":
            from ..ui.pygame_display import PygameDisplay

            display = PygameDisplay(half_range=settings["half_range"])
            worker = threading.Thread(target=loop.run, name="tuner-loop", daemon=True)
            worker.start()
            display.run(loop.snapshot, lambda: worker.is_alive())
            loop.stop()
            worker.join(timeout=1.0)
        else:
            console = ConsoleDisplay(half_range=settings["half_range"])
            loop.events.on_result(console)
            try:
                loop.run()
            finally:
                console.finish()
    except KeyboardInterrupt:
        print("\nStopped by user")
    finally:
        loop.stop()
        source.close()
    return 0


def run_analyze(args: argparse.Namespace) -> int:
    settings = resolve_settings(ConfigManager(args.config_dir), args)
    source = WavFileAudioSource(args.path)
    with source:
        loop = create_loop(source, settings, cycle_delay=0.0)
        loop.events.on_result(ConsoleDisplay(half_range=settings["half_range"], overwrite=False))
        final = loop.run()
    print(f"Last note: {final.result.label} ({final.result.frequency_text})")
    return 0


def run_devices() -> int:
    from ..audio.devices import list_input_devices

    devices = list_input_devices()
    if not devices:
        print("No audio input devices found")
        return 1

    print("Available input devices:")
    print("-" * 70)
    for device in devices:
        rates = ", ".join(str(rate) for rate in device["sample_rates"]) or "none"
        print(f"Device {device['id']}: {device['name']}")
        print(f"  Default sample rate: {device['default_samplerate']} Hz")
        print(f"  Supported mono 16-bit rates: {rates}")
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments, or None to use sys.argv

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    setup_logging(level="DEBUG" if parsed_args.debug else None)

    try:
        if parsed_args.command == "listen":
            return run_listen(parsed_args)
        elif parsed_args.command == "analyze":
            return run_analyze(parsed_args)
        elif parsed_args.command == "devices":
            return run_devices()
    except (TunerError, ValueError) as e:
        logger.error(str(e))
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
