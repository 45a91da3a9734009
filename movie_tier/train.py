"""
Training script for the top-tier movie classifier comparison.

Cleans the scraped dataset, splits it, cross-validates every model family,
prints the comparison report and optionally writes it as JSON, saves the
recommended model and logs the run to MLflow.

Usage:
    python -m movie_tier.train
    python -m movie_tier.train --data data/raw/movies.csv --reference data/raw/top250.csv
    python -m movie_tier.train --families logistic_regression random_forest --track
"""

import argparse
import sys
import time
from pathlib import Path

import joblib

from .config import (
    CV_FOLDS,
    DEFAULT_FAMILIES,
    MLFLOW_EXPERIMENT_NAME,
    MLFLOW_TRACKING_URI,
    MODELS_DIR,
    N_JOBS,
    RANDOM_STATE,
    RAW_DATA_PATH,
    REFERENCE_DATA_PATH,
    TRAIN_FRACTION,
)
from .dataset import load_raw_data, prepare_dataset
from .errors import Diagnostics, SchemaError, SplitError
from .evaluation import FeatureSchema, constant_columns, run_harness
from .models import get_family
from .reference import load_reference
from .report import format_report
from .splitting import split_dataset


def banner(title):
    print(f"\n{'='*70}")
    print(title)
    print(f"{'='*70}\n")


def narrow_schema(schema, train):
    """Exclude features that are constant within the training partition."""
    constant = constant_columns(train, schema.resolve(train))
    if constant:
        print(f"  Excluding constant training columns: {', '.join(constant)}")
        return schema.without(constant)
    return schema


def save_model(model, family, models_dir=MODELS_DIR):
    models_dir = Path(models_dir)
    models_dir.mkdir(parents=True, exist_ok=True)
    path = models_dir / f"{family}.joblib"
    joblib.dump(model, path)
    print(f"\nv Recommended model saved locally: {path}")
    return path


def run(args):
    diagnostics = Diagnostics()

    banner("Loading Reference Table")
    lookup = load_reference(args.reference, diagnostics=diagnostics)
    print(f"  Distinguished directors: {len(lookup.distinguished_directors)}")
    print(f"  Distinguished actors: {len(lookup.distinguished_actors)}")

    banner("Cleaning Movie Dataset")
    raw = load_raw_data(args.data)
    movies = prepare_dataset(raw, lookup, diagnostics=diagnostics, verbose=True)

    banner("Splitting")
    train, test = split_dataset(movies, train_fraction=args.train_fraction, seed=args.seed)
    print(f"  Train: {len(train)}")
    print(f"  Test: {len(test)}")
    schema = narrow_schema(FeatureSchema(), train)

    banner("Evaluating Model Families")
    start = time.time()
    families = [get_family(name) for name in args.families]
    report, models = run_harness(
        train, test, schema, families,
        k=args.folds, seed=args.seed, n_jobs=args.n_jobs,
        diagnostics=diagnostics, verbose=True,
    )
    print(f"\nEvaluation complete in {time.time() - start:.2f}s")

    print()
    print(format_report(report))

    if args.report_json:
        path = Path(args.report_json)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.model_dump_json(indent=2))
        print(f"\nv Report written: {path}")

    if args.save_model and report.recommended:
        save_model(models[report.recommended], report.recommended, args.models_dir)

    if args.track:
        from .tracking import log_comparison
        log_comparison(
            report,
            run_params={
                "data": str(args.data),
                "reference": str(args.reference),
                "train_fraction": args.train_fraction,
                "folds": args.folds,
            },
            tracking_uri=args.tracking_uri,
            experiment_name=args.experiment,
        )

    return report


def build_parser():
    parser = argparse.ArgumentParser(
        description="Clean the movie dataset and compare top-tier classifiers"
    )
    parser.add_argument("--data", type=Path, default=RAW_DATA_PATH, help="Primary movie CSV")
    parser.add_argument("--reference", type=Path, default=REFERENCE_DATA_PATH, help="Top 250 reference CSV")
    parser.add_argument("--seed", type=int, default=RANDOM_STATE, help="Random seed for split and folds")
    parser.add_argument("--train-fraction", type=float, default=TRAIN_FRACTION, help="Share of rows used for training")
    parser.add_argument("--folds", type=int, default=CV_FOLDS, help="Cross-validation folds")
    parser.add_argument("--n-jobs", type=int, default=N_JOBS, help="Parallel jobs for fold fitting")
    parser.add_argument(
        "--families", nargs="+", default=DEFAULT_FAMILIES, choices=DEFAULT_FAMILIES,
        help="Model families to evaluate",
    )
    parser.add_argument("--report-json", type=Path, default=None, help="Write the report as JSON")
    parser.add_argument("--save-model", action="store_true", help="Save the recommended model with joblib")
    parser.add_argument("--models-dir", type=Path, default=MODELS_DIR)
    parser.add_argument("--track", action="store_true", help="Log the run to MLflow")
    parser.add_argument("--tracking-uri", type=str, default=MLFLOW_TRACKING_URI)
    parser.add_argument("--experiment", type=str, default=MLFLOW_EXPERIMENT_NAME)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print(f"\n{'='*70}")
    print("TOP-TIER MOVIE CLASSIFICATION - MODEL COMPARISON")
    print(f"{'='*70}")
    print(f"Data: {args.data}")
    print(f"Reference: {args.reference}")
    print(f"Seed: {args.seed}  Train fraction: {args.train_fraction}  Folds: {args.folds}")

    try:
        run(args)
    except FileNotFoundError as e:
        print(f"\n✗ Input error: {e}", file=sys.stderr)
        return 1
    except SchemaError as e:
        print(f"\n✗ Schema error while loading data: {e}", file=sys.stderr)
        return 1
    except SplitError as e:
        print(f"\n✗ Split error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
