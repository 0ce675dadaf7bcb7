"""Convenience script to run the complete JokerTag pipeline."""

import argparse
import subprocess
import sys
from pathlib import Path

def run_command(command: list, description: str) -> bool:
    """
    Run a command and return success status.

    Args:
        command: List of command components
        description: Description of what the command does

    Returns:
        True if command succeeded, False otherwise
    """
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(command)}")
    print(f"{'='*60}")

    try:
        result = subprocess.run(command, check=True, capture_output=True, text=True)
        print(result.stdout)
        if result.stderr:
            print("STDERR:", result.stderr)
        return True
    except subprocess.CalledProcessError as e:
        print(f"ERROR: {description} failed with exit code {e.returncode}")
        print(f"STDOUT: {e.stdout}")
        print(f"STDERR: {e.stderr}")
        return False

def main():
    """Run the complete JokerTag pipeline."""
    parser = argparse.ArgumentParser(
        description="Run rule diagnosis, tagging and synergy ranking"
    )
    parser.add_argument(
        "--joker-table",
        type=Path,
        default="data/jokers.csv",
        help="Path to joker CSV file"
    )
    parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="Path to tag rules JSON file (default: packaged taxonomy)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default="output",
        help="Directory for tagged table, ranked pairs and charts"
    )
    parser.add_argument(
        "--skip-diagnosis",
        action="store_true",
        help="Skip rule diagnosis step"
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=5,
        help="Number of top pairs to report"
    )

    args = parser.parse_args()

    rules_args = ["--rules", str(args.rules)] if args.rules else []

    steps = []

    # Diagnosis exits 1 when some rule never fires, which should not stop the run
    if not args.skip_diagnosis:
        steps.append(([
            sys.executable, "-m", "jokertag.pipeline.diagnose",
            str(args.joker_table), *rules_args
        ], "Rule Diagnosis", False))

    steps.extend([
        ([
            sys.executable, "-m", "jokertag.pipeline.tag",
            str(args.joker_table),
            "--output", str(args.output_dir / "jokers_tagged.csv"),
            *rules_args
        ], "Joker Tagging", True),
        ([
            sys.executable, "-m", "jokertag.pipeline.synergy",
            str(args.joker_table),
            "--output", str(args.output_dir / "synergy_pairs.csv"),
            "--top-k", str(args.top_k),
            "--plots-dir", str(args.output_dir / "plots"),
            *rules_args
        ], "Synergy Ranking", True),
    ])

    print("Starting JokerTag Pipeline")
    print(f"Total steps: {len(steps)}")

    for i, (command, description, required) in enumerate(steps, 1):
        print(f"\n[Step {i}/{len(steps)}] {description}")

        if not run_command(command, description) and required:
            print(f"\nPipeline failed at step {i}: {description}")
            sys.exit(1)

    print("\n" + "="*60)
    print("Pipeline completed successfully!")
    print(f"Check {args.output_dir} for results.")
    print("="*60)

if __name__ == "__main__":
    main()
