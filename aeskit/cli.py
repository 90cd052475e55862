"""Command-line entry point: encrypt or decrypt a file with a password.

Usage:
    aeskit -i notes.txt -o notes.bin -p hunter2 --encrypt
    aeskit -i notes.bin -o notes.txt -p hunter2 --decrypt
    aeskit --verify --vectors 200 --sac-trials 20
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from aeskit.cipher.key_schedule import expand_key
from aeskit.cipher.message import CipherMessage, PlainMessage
from aeskit.config import Settings, load_settings
from aeskit.evaluation import EvaluationReport, compute_sac, run_roundtrip_tests
from aeskit.keys import derive_key
from aeskit.utils.repro import make_run_dir, write_json

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aeskit",
        description="Encrypt or decrypt a file with a Rijndael-style block cipher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  aeskit -i in.txt -o out.bin -p secret -e\n"
            "  aeskit -i out.bin -o in.txt -p secret -d\n"
            "  aeskit --verify --vectors 100\n"
        ),
    )
    parser.add_argument("-i", "--input-file", default="", help="File to encrypt or decrypt")
    parser.add_argument("-o", "--output-file", default="", help="Output file after encrypt or decrypt")
    parser.add_argument("-p", "--password", default="", help="Password")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-e", "--encrypt", action="store_true", help="Encrypt")
    mode.add_argument("-d", "--decrypt", action="store_true", help="Decrypt")
    mode.add_argument("--verify", action="store_true",
                      help="Run roundtrip and avalanche checks and write a JSON report")

    parser.add_argument("--workers", type=int, default=None,
                        help="Threads for per-block work (default: AESKIT_WORKERS or 1)")
    parser.add_argument("--vectors", type=int, default=None,
                        help="Roundtrip vectors for --verify (default: AESKIT_ROUNDTRIP_VECTORS)")
    parser.add_argument("--sac-trials", type=int, default=None,
                        help="SAC trials per input bit for --verify (default: AESKIT_SAC_TRIALS)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def encrypt_file(input_file: str, output_file: str, password: str, *, workers: int = 1) -> int:
    data = Path(input_file).read_bytes()
    schedule = expand_key(derive_key(password))
    encrypted = PlainMessage(data).encode(schedule, workers=workers)
    Path(output_file).write_bytes(encrypted.data)
    logger.info("Encrypted %d bytes -> %d bytes", len(data), len(encrypted.data))
    return len(encrypted.data)


def decrypt_file(input_file: str, output_file: str, password: str, *, workers: int = 1) -> int:
    data = Path(input_file).read_bytes()
    schedule = expand_key(derive_key(password))
    decrypted = CipherMessage(data).decode(schedule, workers=workers)
    Path(output_file).write_bytes(decrypted.data)
    logger.info("Decrypted %d bytes -> %d bytes", len(data), len(decrypted.data))
    return len(decrypted.data)


def run_verification(settings: Settings, *, vectors: int, sac_trials: int, workers: int) -> EvaluationReport:
    report = EvaluationReport(
        roundtrip=run_roundtrip_tests(num_vectors=vectors, seed=settings.global_seed, workers=workers),
        sac_results=[
            compute_sac(input_type="plaintext", trials=sac_trials, seed=settings.global_seed),
            compute_sac(input_type="key", trials=sac_trials, seed=settings.global_seed),
        ],
    )
    run_dir = make_run_dir(settings.runs_dir, "verify")
    write_json(run_dir / "report.json", report.to_dict())
    logger.info("Report written to %s", run_dir / "report.json")
    return report


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or settings.verbose) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    workers = args.workers if args.workers is not None else settings.workers

    try:
        if args.verify:
            report = run_verification(
                settings,
                vectors=args.vectors if args.vectors is not None else settings.roundtrip_vectors,
                sac_trials=args.sac_trials if args.sac_trials is not None else settings.sac_trials,
                workers=workers,
            )
            print(report.to_summary())
            return 0 if not report.failing_checks() else 1

        if not args.input_file or not args.output_file:
            print("Input and output files must be specified.", file=sys.stderr)
            return 1
        if not args.password:
            print("Password must be specified.", file=sys.stderr)
            return 1

        if args.encrypt:
            encrypt_file(args.input_file, args.output_file, args.password, workers=workers)
        elif args.decrypt:
            decrypt_file(args.input_file, args.output_file, args.password, workers=workers)
        else:
            print("Please specify either --encrypt or --decrypt.", file=sys.stderr)
            return 1
    except (ValueError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print("Operation completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
