import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import argparse
from pathlib import Path
import pandas as pd
from contlife.experiments.sim import run
from contlife.experiments.scenarios import scenario
from contlife.analysis.metrics import metrics_from_log
from contlife.analysis.plots import plot_timeseries


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", default="outputs", help="output directory")
    ap.add_argument("--T", type=int, default=200, help="generations per run")
    ap.add_argument("--scenarios", nargs="+", default=["default", "dense"])
    args = ap.parse_args(argv)

    out = Path(args.outdir); out.mkdir(parents=True, exist_ok=True)

    for name in args.scenarios:
        log = run(T=args.T, config=scenario(name))
        metrics, df = metrics_from_log(log)
        df.to_csv(out/f'timeseries_{name}.csv', index=False)
        plot_timeseries(df, str(out/f'{name}'))
        print(f"[demo] {name}: {metrics['generations']} generations, "
              f"final occupied {metrics['final_occupied']}", flush=True)

    rows = []
    for name in args.scenarios:
        df = pd.read_csv(out/f'timeseries_{name}.csv')
        metrics, _ = metrics_from_log(df.to_dict(orient='list'))
        metrics['config'] = name
        rows.append(metrics)
    pd.DataFrame(rows).to_csv(out/'metrics_summary.csv', index=False)
    print("[demo] Demo complete.")


if __name__ == "__main__":
    main()
