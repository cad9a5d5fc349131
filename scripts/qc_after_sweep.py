# scripts/qc_after_sweep.py
import argparse, json, sys
from pathlib import Path
import pandas as pd

GROUP_COLS = ["grid", "seed_fraction"]
REQUIRED = GROUP_COLS + ["seed", "final_occupied", "peak_occupied", "extinct",
                         "time_to_extinction", "vitality_min", "vitality_max"]


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--raw", required=True, help="Path to metrics_summary_raw.csv")
    ap.add_argument("--outdir", required=True, help="Output directory (same as sweep)")
    ap.add_argument("--min_seeds", type=int, default=5, help="Min runs per group")
    args = ap.parse_args(argv)

    raw = pd.read_csv(args.raw)

    missing = [c for c in REQUIRED if c not in raw.columns]
    if missing:
        print(f"[qc] Missing columns in raw: {missing}", file=sys.stderr)
        return 2

    # vitalities must stay inside [0,1] for every run
    out_of_range = raw[(raw["vitality_min"] < 0) | (raw["vitality_max"] > 1)]

    g = (raw
         .groupby(GROUP_COLS, dropna=False)
         .agg(
            n=("seed", "count"),
            final_occupied_mean=("final_occupied", "mean"),
            final_occupied_std=("final_occupied", "std"),
            peak_occupied_mean=("peak_occupied", "mean"),
            extinction_count=("extinct", "sum"),
         )
         .reset_index())
    g["extinction_rate"] = g["extinction_count"] / g["n"]

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    grouped_path = outdir / "qc_grouped.csv"
    g.to_csv(grouped_path, index=False)
    print(f"[qc] wrote grouped CSV -> {grouped_path}")

    under = g[g["n"] < args.min_seeds].copy()
    report = {
        "total_groups": int(len(g)),
        "min_seeds_required": args.min_seeds,
        "groups_below_threshold": int(len(under)),
        "examples_below": under.head(10).to_dict(orient="records"),
        "runs_out_of_range": int(len(out_of_range)),
        "ok": len(under) == 0 and len(out_of_range) == 0,
    }
    (outdir / "qc_report.json").write_text(json.dumps(report, indent=2))
    (outdir / "qc_report.md").write_text(
        f"# QC report\n\n"
        f"- groups: **{len(g)}**\n"
        f"- min_seeds: **{args.min_seeds}**\n"
        f"- groups under threshold: **{len(under)}**\n"
        f"- runs with vitality outside [0,1]: **{len(out_of_range)}**\n\n"
        f"First 10 under-threshold groups:\n\n{under.head(10).to_markdown(index=False)}\n"
    )
    print(f"[qc] min_seeds={args.min_seeds}, groups<{args.min_seeds}: {len(under)}")

    if len(out_of_range) > 0:
        print("[qc] FAIL: vitality left [0,1].", file=sys.stderr)
        return 4
    if len(under) > 0:
        print("[qc] FAIL: not enough seeds per group.", file=sys.stderr)
        return 3
    return 0


if __name__ == "__main__":
    sys.exit(main())
