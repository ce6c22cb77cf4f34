#!/usr/bin/env python3
# scripts/summarize_benchmarks.py
# Aggregate `flowcheck bench` CSVs: validity rate and error counts per stage.

import pandas as pd
import glob
import argparse

SCOPES = ["parse", "document", "node", "edge", "contract"]


def load_csv(path: str) -> pd.DataFrame:
    """Load a bench CSV and ensure required columns exist."""
    df = pd.read_csv(path)
    if "id" not in df.columns:
        df.rename(columns={df.columns[0]: "id"}, inplace=True)

    needed = ["id", "valid", "n_errors"]
    for col in needed:
        if col not in df.columns:
            raise ValueError(f"{path} is missing required column '{col}'")

    # older runs may predate per-stage columns
    for col in SCOPES:
        if col not in df.columns:
            df[col] = 0

    return df[needed + SCOPES]


def summarize(name: str, df: pd.DataFrame) -> pd.DataFrame:
    """One summary row for a bench CSV."""
    total = len(df)
    n_valid = int(df["valid"].sum()) if total else 0

    row = {
        "bench": name,
        "workflows": total,
        "valid": n_valid,
        "valid_%": round(n_valid / total * 100.0, 1) if total else None,
        "mean_errors": round(df["n_errors"].mean(), 2) if total else None,
    }
    for col in SCOPES:
        row[f"{col}_errors"] = int(df[col].sum())
        # share of workflows with at least one error from this stage
        row[f"{col}_affected_%"] = round((df[col] > 0).mean() * 100.0, 1) if total else None
    return pd.DataFrame([row])


def main():
    ap = argparse.ArgumentParser(description="Summarize flowcheck bench CSVs.")
    ap.add_argument("--glob", default="experiments/results/*.csv", help="Glob for bench CSV files")
    ap.add_argument("--out", default="experiments/results/summary.csv", help="Summary CSV path")
    args = ap.parse_args()

    frames = []
    for path in sorted(glob.glob(args.glob)):
        if path == args.out:
            continue
        try:
            df = load_csv(path)
        except ValueError as exc:
            print(f"[skip] {exc}")
            continue
        frames.append(summarize(path, df))

    if not frames:
        print(f"[warn] no bench CSVs matched {args.glob}")
        return

    summary = pd.concat(frames, ignore_index=True)
    summary.to_csv(args.out, index=False)
    print(summary.to_string(index=False))
    print(f"[ok] wrote {args.out}")


if __name__ == "__main__":
    main()
