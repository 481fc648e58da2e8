"""Headless run - drive the simulation without a renderer and print progress.

Usage:
  python examples/headless/main.py --seconds 120 --map-size 48
"""
from __future__ import annotations

import argparse
from datetime import datetime

from loguru import logger

from fogwork import WorldConfig, configure_logging
from fogwork_sim import build_simulation
from seed import build_store


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="fogwork headless simulation")
    p.add_argument("--seed", type=int, default=42, help="Terrain/engine seed (default: 42)")
    p.add_argument("--map-size", type=int, default=48, help="Grid width/height (default: 48)")
    p.add_argument("--seconds", type=float, default=60.0, help="Simulated seconds (default: 60)")
    p.add_argument("--fps", type=int, default=30, help="Frames per simulated second (default: 30)")
    p.add_argument("--report-every", type=float, default=10.0,
                   help="Seconds between progress reports (default: 10)")
    p.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    args = p.parse_args()
    args.map_size = max(16, args.map_size)
    args.fps = max(1, args.fps)
    return args


def report(sim) -> None:
    summary = sim.summary(datetime.now())
    logger.info(
        "t={:.1f}s frame={} revealed={} discovered={}",
        summary.elapsed, summary.frame, summary.revealed_tiles, summary.discovered_nodes,
    )
    for person_id, label in summary.agent_states.items():
        logger.info("  {:<4} {:<24} stamina={:.2f}",
                    person_id, label, summary.agent_stamina[person_id])
    for milestone_id, progress in summary.milestone_progress.items():
        logger.info("  milestone {} {:.0%}", milestone_id, progress)


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)
    config = WorldConfig(map_size=args.map_size, seed=args.seed)
    sim = build_simulation(build_store(), config)

    dt = 1.0 / args.fps
    frames_per_report = max(1, int(args.report_every * args.fps))
    remaining = int(args.seconds * args.fps)
    while remaining > 0:
        chunk = min(frames_per_report, remaining)
        for _ in range(chunk):
            sim.step(dt)
        remaining -= chunk
        report(sim)

    done = sum(1 for p in sim.summary().task_progress.values() if p >= 100)
    logger.info("Finished: {}/{} tasks complete", done, len(sim.store.get_tasks()))


if __name__ == "__main__":
    main()
