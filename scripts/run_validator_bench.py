#!/usr/bin/env python3
import os, json, glob, csv, argparse
from flowcheck.config import ValidatorOptions
from flowcheck.structural.checker import validate


def _workflow_path(case_dir):
    for name in ("workflow.json", "workflow.txt"):
        p = os.path.join(case_dir, name)
        if os.path.exists(p):
            return p
    return None


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--bench", default="bench/validator", help="bench directory containing V*/")
    ap.add_argument("--out", default="experiments/results/validator_bench.csv")
    ap.add_argument("--no-strict-types", action="store_true", help="only check required config keys")
    args = ap.parse_args()

    options = ValidatorOptions.from_env()
    if args.no_strict_types:
        options = options.override(check_config_types=False)

    cases = sorted(glob.glob(os.path.join(args.bench, "V*")))
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)

    n_pass = 0
    with open(args.out, "w", newline="", encoding="utf-8") as fo:
        w = csv.writer(fo)
        w.writerow(["case", "valid", "expected_valid", "n_errors", "expected_n_errors", "pass", "errors"])
        for c in cases:
            wf_path = _workflow_path(c)
            if wf_path is None:
                print(f"[skip] {c}: no workflow.json / workflow.txt")
                continue
            with open(wf_path, "rb") as f:
                raw = f.read()
            with open(os.path.join(c, "expect.json"), "r", encoding="utf-8") as f:
                expect = json.load(f).get("assert") or {}

            result = validate(raw, options=options)
            exp_valid = expect.get("valid")
            exp_n = expect.get("n_errors")
            ok = (exp_valid is None or result.valid == exp_valid) and (exp_n is None or len(result.errors) == exp_n)
            n_pass += ok
            w.writerow([os.path.basename(c), result.valid, exp_valid, len(result.errors), exp_n, ok, "; ".join(result.messages)])

    print(f"Wrote {args.out} with {len(cases)} cases ({n_pass} passing).")


if __name__ == "__main__":
    main()
