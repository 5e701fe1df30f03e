import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_carver' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.algo.registry import ALGORITHMS
from maze_carver.config import CarveConfig, DEFAULT_ALGORITHM, DEFAULT_HEIGHT, DEFAULT_STEP_DELAY, DEFAULT_WIDTH
from maze_carver.core.errors import MazeError
from maze_carver.driver import MazeDriver


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Carver: step-by-step perfect maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Maze Width (even values are rounded up)")
    gen_parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Maze Height (even values are rounded up)")
    gen_parser.add_argument("--algo", type=str, default=DEFAULT_ALGORITHM, choices=sorted(ALGORITHMS), help="Generation Algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--delay", type=float, default=DEFAULT_STEP_DELAY, help="Seconds between animated steps")
    gen_parser.add_argument("--instant", action="store_true", help="Carve the whole maze at once in the visual window instead of animating")
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--mute", action="store_true", help="Disable step/completion sounds")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time both algorithms")
    bench_parser.add_argument("--size", type=int, default=201, help="Benchmark width and height")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser


def run_generate(args, logger) -> int:
    config = CarveConfig.from_args(args)
    driver = MazeDriver(config)

    if args.visual or args.record:
        logger.info("Visual mode enabled - Opening window...")
        from maze_carver.viz.feedback import SoundFeedback
        from maze_carver.viz.recorder import VideoRecorder, default_output_file
        from maze_carver.viz.renderer import Renderer

        recorder = None
        if args.record:
            out = default_output_file(config.algorithm, config.width, config.height)
            recorder = VideoRecorder(active=True, output_file=out)
            logger.info(f"Recording video to {out}")

        feedback = SoundFeedback(muted=args.mute)
        renderer = Renderer(driver, feedback=feedback, recorder=recorder)
        driver.attach(renderer)

        renderer.init_window()
        feedback.init()
        renderer.run_loop()
        return 0

    # Headless: nothing to animate, so carve straight to completion
    driver.generate(instant=True)
    print(driver.grid.render_text())
    return 0


def run_benchmark(args, logger) -> int:
    print(f"\n{'ALGORITHM':<12} | {'TIME (s)':<10} | {'STEPS':<10} | {'CELLS':<10}")
    print("-" * 52)

    for name in ("prim", "dfs"):
        config = CarveConfig(width=args.size, height=args.size, algorithm=name, seed=args.seed, instant=True)
        driver = MazeDriver(config)

        t_start = time.time()
        run = driver.generate()
        duration = time.time() - t_start

        print(f"{name:<12} | {duration:<10.4f} | {run.steps:<10} | {driver.grid.cell_count():<10}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_carver")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            return run_generate(args, logger)
        elif args.command == "benchmark":
            return run_benchmark(args, logger)
    except MazeError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
