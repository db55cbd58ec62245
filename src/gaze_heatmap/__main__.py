import argparse
import asyncio
import logging
import sys

from gaze_heatmap.acquisition import DummyHitSource
from gaze_heatmap.configs.app import AppSettings
from gaze_heatmap.core import EyeTracker, GazeRunner
from gaze_heatmap.factories import create_exporter, create_session_sinks
from gaze_heatmap.sinks import save_heatmap

logger = logging.getLogger("main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gaze heatmap accumulator (simulated source)")
    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Seconds to run the simulated hit source."
    )
    parser.add_argument(
        "--no-export",
        action="store_true",
        help="Do not export the position buffer when the session ends."
    )
    parser.add_argument(
        "--save-heatmap",
        action="store_true",
        help="Save the intensity grid as a .npy file next to the exports."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the simulated eye dropout."
    )
    return parser.parse_args(argv)


async def run_session(settings: AppSettings, args: argparse.Namespace) -> int:
    tracker = EyeTracker(settings, export_target=create_exporter(settings))
    if args.no_export:
        tracker.is_export_enabled = False

    cfg = settings.dummy_source
    source = DummyHitSource(
        asyncio.Queue(maxsize=cfg.queue_size),
        asyncio.Event(),
        frequency=cfg.frequency,
        radius=cfg.radius,
        center=cfg.center,
        speed=cfg.speed,
        dropout=cfg.dropout,
        seed=args.seed,
    )
    runner = GazeRunner(source, tracker, create_session_sinks(settings))

    await runner.start()
    try:
        await asyncio.sleep(args.duration)
    finally:
        await runner.stop()

    tracker.trigger_export()
    if args.save_heatmap:
        grid = tracker.heatmap_snapshot()
        if grid is not None:
            save_heatmap(grid, settings.export.output_dir)

    tracker.stop()
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    # 1. Load Configuration
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"Configuration Error: {e}")
        return 1

    # 2. Setup Logging
    logging.basicConfig(
        level=settings.logging.level,
        format=settings.logging.format,
        stream=sys.stdout
    )
    logger.info(f"Starting Gaze Heatmap v{settings.__version__}")

    # 3. Run
    try:
        return asyncio.run(run_session(settings, args))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130
    except Exception:
        logger.exception("Fatal Application Error")
        return 1
    finally:
        logger.info("Shutdown sequence initiated.")

if __name__ == "__main__":
    sys.exit(main())
