import argparse
import random
import sys
from pathlib import Path

import numpy as np
from tqdm import tqdm

from segtree.fuzz import fuzz_lazy, fuzz_plain

# Parse settings
parser = argparse.ArgumentParser(
    description="Fuzz the segment trees against a naive array."
)
parser.add_argument(
    "--length", type=int, default=37, metavar="N", help="number of elements."
)
parser.add_argument(
    "--steps", type=int, default=1_000, metavar="S", help="random calls per run."
)
parser.add_argument("--runs", type=int, default=20, help="total number of fuzz runs.")
parser.add_argument(
    "--tree", choices=["lazy", "plain"], default="lazy", help="the tree to fuzz."
)
parser.add_argument(
    "--seed", type=int, default=42, metavar="S", help="random seed (default: 42)."
)
parser.add_argument("--log-dir", default=None, help="path to save the report")
args = parser.parse_args()
assert args.runs > 0, "Invalid runs value."
assert args.length > 0, "Invalid length value."

# Reproducibility
random.seed(args.seed)
rng = np.random.default_rng(args.seed)

fuzz = fuzz_lazy if args.tree == "lazy" else fuzz_plain

report = None
for _ in tqdm(range(args.runs), desc=f"Fuzzing {args.tree} tree"):
    # Vary the length so that both exact and padded power-of-2 sizes get hit
    length = random.randint(1, args.length)
    run = fuzz(length, args.steps, rng)
    report = run if report is None else report + run

print(report)

if args.log_dir:
    log_dir = Path(args.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    with open(log_dir / f"fuzz_{args.tree}_{args.seed}.csv", "w") as f:
        report.to_csv(f)

if report["Mismatches"].sum() > 0:
    sys.exit(1)
