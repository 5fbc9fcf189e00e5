"""Run all performance benchmarks and generate report."""

import json
from pathlib import Path

from benchmark_volumes import run_all_volume_benchmarks


def main():
    """Run all benchmarks and save results."""
    print("=" * 60)
    print("WELLSMITH PERFORMANCE BENCHMARK SUITE")
    print("=" * 60)

    all_results = {"volumes": run_all_volume_benchmarks()}

    output_file = Path("benchmarks/results.json")
    output_file.parent.mkdir(exist_ok=True)

    def convert_to_native(obj):
        """Convert numpy types to native Python types."""
        if isinstance(obj, dict):
            return {k: convert_to_native(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [convert_to_native(item) for item in obj]
        elif hasattr(obj, "item"):  # numpy scalar
            return obj.item()
        else:
            return obj

    with open(output_file, "w") as f:
        json.dump(convert_to_native(all_results), f, indent=2)

    print(f"\n✓ Results saved to {output_file}")


if __name__ == "__main__":
    main()
