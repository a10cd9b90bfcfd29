"""seqtrace command-line interface."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from seqtrace.alignment import BandedParams, ScoringParams, aligner_from_name
from seqtrace.folding import run_folding
from seqtrace.phylo import run_upgma
from seqtrace.suffix import build_suffix_tree
from seqtrace.utils.logging import get_logger, set_verbosity
from seqtrace.utils.validation import detect_sequence_kind, ensure_sequence

_LOGGER = get_logger("cli")

ALIGNERS = ("global", "local", "dovetail", "banded")
FOLDERS = ("genetic", "hill-climb", "simulated-annealing", "chou-fasman")
SEQUENCE_KINDS = ("auto", "dna", "protein")

EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seqtrace", description="Step-traced sequence alignment and folding")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG logs")
    subparsers = parser.add_subparsers(dest="command")

    align_parser = subparsers.add_parser("align", help="Align two sequences")
    align_parser.add_argument("algorithm", choices=ALIGNERS)
    align_parser.add_argument("seq1")
    align_parser.add_argument("seq2")
    align_parser.add_argument("--match", type=float, default=1.0)
    align_parser.add_argument("--mismatch", type=float, default=-1.0)
    align_parser.add_argument("--gap", type=float, default=-2.0, help="Gap penalty (negative)")
    align_parser.add_argument("--bandwidth", type=int, help="Required for the banded algorithm")
    align_parser.add_argument(
        "--kind",
        choices=SEQUENCE_KINDS,
        default="auto",
        help="Sequence alphabet; auto tries DNA and falls back to protein",
    )
    align_parser.add_argument("--steps", action="store_true", help="Include the matrix and fill trace")

    fold_parser = subparsers.add_parser("fold", help="Fold a protein sequence")
    fold_parser.add_argument("algorithm", choices=FOLDERS)
    fold_parser.add_argument("sequence")
    fold_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Algorithm parameter, e.g. --param generations=20 (repeatable)",
    )
    fold_parser.add_argument("--steps", action="store_true", help="Include the step trace")

    run_parser = subparsers.add_parser("run", help="Run the jobs listed in a YAML/JSON file")
    run_parser.add_argument("config", help="Path to YAML/JSON run file")
    run_parser.add_argument("--steps", action="store_true", help="Include step traces")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        set_verbosity("DEBUG" if args.verbose > 1 else "INFO")

    try:
        if args.command == "align":
            payload = _align(
                args.algorithm,
                args.seq1,
                args.seq2,
                {
                    "match": args.match,
                    "mismatch": args.mismatch,
                    "gap": args.gap,
                    "bandwidth": args.bandwidth,
                },
                kind=args.kind,
                include_trace=args.steps,
            )
        elif args.command == "fold":
            payload = _fold(args.algorithm, args.sequence, _parse_params(args.param), include_trace=args.steps)
        elif args.command == "run":
            payload = _run_from_config(Path(args.config), include_trace=args.steps)
        else:
            parser.print_help()
            return 0
    except (ValueError, KeyError, FileNotFoundError) as exc:
        print(f"seqtrace: error: {_describe(exc)}", file=sys.stderr)
        return EXIT_USAGE

    print(json.dumps(payload, indent=2, allow_nan=False))
    return 0


def _describe(exc: Exception) -> str:
    # KeyError wraps its message in quotes.
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    return str(exc)


def _parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"--param expects KEY=VALUE, got {pair!r}")
        params[key.strip()] = value.strip()
    return params


def _align(
    algorithm: str,
    raw1: str,
    raw2: str,
    scoring: Mapping[str, Any],
    *,
    kind: str = "auto",
    include_trace: bool,
) -> dict[str, Any]:
    seq1, seq2 = _ensure_pair(raw1, raw2, kind)
    aligner = aligner_from_name(algorithm)

    match = float(scoring.get("match", 1.0))
    mismatch = float(scoring.get("mismatch", -1.0))
    gap = float(scoring.get("gap", scoring.get("gap_penalty", -2.0)))
    if algorithm.lower() == "banded":
        bandwidth = scoring.get("bandwidth")
        if bandwidth is None:
            raise ValueError("bandwidth is required for banded alignment")
        params: ScoringParams = BandedParams(match, mismatch, gap, int(bandwidth))
    else:
        params = ScoringParams(match, mismatch, gap)

    _LOGGER.info("Aligning %d x %d residues with %s", len(seq1), len(seq2), algorithm)
    result = aligner(seq1, seq2, params)
    payload = result.to_dict(include_trace=include_trace)
    payload["params"] = params.as_dict()
    return payload


def _ensure_pair(raw1: str, raw2: str, kind: str) -> tuple[str, str]:
    """Validate both sequences against one alphabet.

    With ``kind="auto"`` a mostly-nucleotide pair is tried as DNA first; a
    pair that fails that check is validated as protein instead.
    """
    if kind not in SEQUENCE_KINDS:
        raise ValueError(f"sequence kind must be one of {', '.join(SEQUENCE_KINDS)}; got {kind!r}")
    if kind == "auto":
        guess = detect_sequence_kind(f"{raw1}{raw2}")
        if guess == "dna":
            try:
                return ensure_sequence(raw1, "dna", label="seq1"), ensure_sequence(raw2, "dna", label="seq2")
            except ValueError:
                _LOGGER.debug("Pair is not valid DNA; validating as protein")
        kind = "protein"
    return ensure_sequence(raw1, kind, label="seq1"), ensure_sequence(raw2, kind, label="seq2")


def _fold(
    algorithm: str,
    raw: str,
    params: Mapping[str, Any] | None,
    *,
    include_trace: bool,
) -> dict[str, Any]:
    sequence = ensure_sequence(raw, "protein")
    result = run_folding(algorithm, sequence, params)
    return result.to_dict(include_trace=include_trace)


def _run_from_config(path: Path, *, include_trace: bool) -> dict[str, Any]:
    data = _load_config(path)
    jobs = data.get("jobs") if isinstance(data, dict) else None
    if not jobs:
        raise ValueError("run file must define a non-empty 'jobs' list")

    results = []
    for index, job in enumerate(jobs):
        if not isinstance(job, Mapping):
            raise ValueError(f"jobs[{index}] must be a mapping")
        kind = job.get("kind")
        if kind == "align":
            results.append(
                _align(
                    _require(job, "algorithm", index),
                    _require(job, "seq1", index),
                    _require(job, "seq2", index),
                    job.get("params", {}),
                    kind=job.get("sequence_kind", "auto"),
                    include_trace=include_trace,
                )
            )
        elif kind == "fold":
            results.append(
                _fold(
                    _require(job, "algorithm", index),
                    _require(job, "sequence", index),
                    job.get("params"),
                    include_trace=include_trace,
                )
            )
        elif kind == "upgma":
            tree = run_upgma(_require(job, "labels", index), _require(job, "distances", index))
            payload = tree.to_dict()
            if not include_trace:
                payload.pop("steps")
            results.append(payload)
        elif kind == "suffix-tree":
            text = ensure_sequence(_require(job, "text", index), "dna", label="text")
            results.append(build_suffix_tree(text).to_dict(include_trace=include_trace))
        else:
            raise ValueError(
                f"jobs[{index}].kind must be one of align, fold, upgma, suffix-tree; got {kind!r}"
            )
    return {"jobs": results}


def _require(job: Mapping[str, Any], key: str, index: int) -> Any:
    if key not in job:
        raise ValueError(f"jobs[{index}].{key} is required")
    return job[key]


def _load_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() in {".json"}:
        return json.loads(path.read_text())
    return yaml.safe_load(path.read_text())


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
