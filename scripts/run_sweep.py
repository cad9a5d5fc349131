#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Run a parameter sweep over (grid, seed_fraction) and seeds, and emit:
  - metrics_summary_raw.csv           (one row per run)
  - metrics_summary_grouped.csv       (means/stds by group + n/extinction metrics)
  - timeseries_samples/               (a few illustrative time series)

CLI:
  python scripts/run_sweep.py --T 300 --outdir outputs/sweep --seeds 10 --seed-offset 0
"""

from __future__ import annotations
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import argparse
from dataclasses import dataclass
from pathlib import Path
import pandas as pd

from contlife.analysis.metrics import metrics_from_log
from contlife.config import SimConfig
from contlife.experiments.sim import run


# ------------------------- factors / knobs -------------------------

GRIDS = ["50x50", "100x100"]
SEED_FRACTIONS = [0.005, 0.01, 0.02]

GROUP_COLS = ["grid", "seed_fraction"]


# ------------------------- simulation core -------------------------

@dataclass
class EpisodeConfig:
    grid: str
    seed_fraction: float
    T: int
    seed: int

    def sim_config(self) -> SimConfig:
        w, h = (int(v) for v in self.grid.split("x"))
        return SimConfig(width=w, height=h, seed=self.seed, seed_fraction=self.seed_fraction)


def run_episode(cfg: EpisodeConfig):
    log = run(T=cfg.T, config=cfg.sim_config())
    metrics, df = metrics_from_log(log)
    row = {"grid": cfg.grid, "seed_fraction": cfg.seed_fraction, "seed": cfg.seed, **metrics}
    return row, df


# ------------------------- I/O helpers -------------------------

def write_timeseries_sample(root: Path, cfg: EpisodeConfig, df: pd.DataFrame, limit: int = 2):
    """
    Save a few tiny samples for the first couple of seeds per group.
    """
    if (cfg.seed % 1000) >= limit:
        return
    d = root / "timeseries_samples" / f"{cfg.grid}_{cfg.seed_fraction}"
    d.mkdir(parents=True, exist_ok=True)
    df.to_csv(d / f"seed_{cfg.seed}.csv", index=False)


def group_metrics(raw_df: pd.DataFrame) -> pd.DataFrame:
    g = (raw_df
         .groupby(GROUP_COLS, dropna=False)
         .agg(
            n=("seed", "count"),
            final_occupied_mean=("final_occupied", "mean"),
            final_occupied_std=("final_occupied", "std"),
            peak_occupied_mean=("peak_occupied", "mean"),
            mean_clusters_mean=("mean_clusters", "mean"),
            final_mean_vitality_mean=("final_mean_vitality", "mean"),
            extinction_count=("extinct", "sum"),
            vitality_min=("vitality_min", "min"),
            vitality_max=("vitality_max", "max"),
         )
         .reset_index())

    g["extinction_rate"] = g["extinction_count"] / g["n"]
    # conditional mean time-to-extinction
    cond = (raw_df[raw_df["extinct"]]
            .groupby(GROUP_COLS)["time_to_extinction"]
            .mean()
            .rename("tte_conditional_mean")
            .reset_index())
    return g.merge(cond, on=GROUP_COLS, how="left")


# ------------------------- main sweep -------------------------

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--T", type=int, default=300, help="generations per run")
    ap.add_argument("--outdir", type=str, default="outputs/sweep", help="output directory")
    ap.add_argument("--seeds", type=int, default=5, help="runs per (grid, seed_fraction)")
    ap.add_argument("--seed-offset", type=int, default=0, help="additive seed offset (for batching)")
    ap.add_argument("--grids", nargs="+", default=GRIDS)
    ap.add_argument("--fractions", nargs="+", type=float, default=SEED_FRACTIONS)
    args = ap.parse_args(argv)

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    raw_path = outdir / "metrics_summary_raw.csv"
    grp_path = outdir / "metrics_summary_grouped.csv"

    rows = []
    total = len(args.grids) * len(args.fractions) * args.seeds
    for g in args.grids:
        for f in args.fractions:
            for k in range(args.seeds):
                cfg = EpisodeConfig(g, f, args.T, args.seed_offset + k)
                row, df = run_episode(cfg)
                rows.append(row)
                write_timeseries_sample(outdir, cfg, df)

                n_done = len(rows)
                if n_done % 10 == 0 or n_done == total:
                    print(f"[sweep] {n_done}/{total} runs...", flush=True)

    raw_df = pd.DataFrame(rows)
    raw_df.to_csv(raw_path, index=False)
    group_metrics(raw_df).to_csv(grp_path, index=False)

    print("[sweep] Done. Wrote:\n"
          f"- {raw_path}\n"
          f"- {grp_path}\n"
          f"- samples in {outdir / 'timeseries_samples'}",
          flush=True)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
