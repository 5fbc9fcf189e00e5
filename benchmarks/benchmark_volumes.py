"""Performance benchmarks for slicing, volume and pressure calculations."""

import time
from typing import Dict

import numpy as np

from wellsmith.objects import (
    AnnulusSection,
    FluidDomain,
    FluidLayer,
    PipeSection,
    SurveyStation,
)
from wellsmith.primitives import (
    TvdSampler,
    hydrostatic_pressure,
    overlay_step,
    slice_geometry,
    volumes_between,
)


def _random_well(n_pipes: int, n_annuli: int, depth: float = 6000.0):
    """Contiguous pipe and annulus lists with staggered boundaries."""
    rng = np.random.default_rng(42)

    def _cuts(n):
        inner = np.sort(rng.uniform(0, depth, n - 1))
        return np.concatenate([[0.0], inner, [depth]])

    pipe_cuts = _cuts(n_pipes)
    annulus_cuts = _cuts(n_annuli)
    pipes = [
        PipeSection(top=t, length=b - t, inner_diameter=0.0953, outer_diameter=0.127)
        for t, b in zip(pipe_cuts, pipe_cuts[1:])
    ]
    annuli = [
        AnnulusSection(top=t, length=b - t, inner_diameter=rng.uniform(0.2, 0.35))
        for t, b in zip(annulus_cuts, annulus_cuts[1:])
    ]
    return pipes, annuli


def benchmark_slicing(n_pipes: int = 50, n_annuli: int = 20) -> Dict[str, float]:
    """Benchmark slice building.

    Args:
        n_pipes: Number of drill-string sections.
        n_annuli: Number of annulus sections.

    Returns:
        Dictionary with timing results.
    """
    pipes, annuli = _random_well(n_pipes, n_annuli)

    start = time.perf_counter()
    slices = slice_geometry(pipes, annuli)
    elapsed = time.perf_counter() - start

    return {
        "n_pipes": n_pipes,
        "n_annuli": n_annuli,
        "n_slices": len(slices),
        "time_seconds": elapsed,
    }


def benchmark_volume_queries(
    n_pipes: int = 50, n_annuli: int = 20, n_queries: int = 1000
) -> Dict[str, float]:
    """Benchmark interval volume queries with and without pre-built slices."""
    pipes, annuli = _random_well(n_pipes, n_annuli)
    rng = np.random.default_rng(7)
    intervals = rng.uniform(0, 6000, size=(n_queries, 2))

    start = time.perf_counter()
    for top, bottom in intervals:
        volumes_between(pipes, annuli, top, bottom)
    cold_time = time.perf_counter() - start

    slices = slice_geometry(pipes, annuli)
    start = time.perf_counter()
    for top, bottom in intervals:
        volumes_between(pipes, annuli, top, bottom, slices=slices)
    warm_time = time.perf_counter() - start

    return {
        "n_queries": n_queries,
        "cold_time_seconds": cold_time,
        "warm_time_seconds": warm_time,
        "queries_per_second": n_queries / warm_time,
    }


def benchmark_overlay_and_pressure(
    n_steps: int = 200, n_depths: int = 500, n_stations: int = 100
) -> Dict[str, float]:
    """Benchmark repeated overlays followed by pressure evaluation."""
    rng = np.random.default_rng(3)
    layers = [FluidLayer(FluidDomain.ANNULUS, 0.0, 6000.0, "Base", 1260.0)]

    start = time.perf_counter()
    for i in range(n_steps):
        top, bottom = np.sort(rng.uniform(0, 6000, 2))
        step = FluidLayer(FluidDomain.ANNULUS, top, bottom, f"Step {i}", rng.uniform(1000, 2100))
        layers = overlay_step(layers, step)
    overlay_time = time.perf_counter() - start

    md = np.linspace(0, 6000, n_stations)
    sampler = TvdSampler([SurveyStation(m, 0.9 * m) for m in md])
    start = time.perf_counter()
    for depth in np.linspace(0, 5400, n_depths):
        hydrostatic_pressure(layers, sampler, depth)
    pressure_time = time.perf_counter() - start

    return {
        "n_steps": n_steps,
        "n_layers": len(layers),
        "overlay_time_seconds": overlay_time,
        "pressure_time_seconds": pressure_time,
    }


def run_all_volume_benchmarks() -> Dict[str, Dict]:
    """Run all volume benchmarks."""
    results = {
        "slicing": {
            "small": benchmark_slicing(10, 5),
            "large": benchmark_slicing(500, 100),
        },
        "volume_queries": benchmark_volume_queries(),
        "overlay_pressure": benchmark_overlay_and_pressure(),
    }
    for name, value in results["slicing"].items():
        print(f"  Slicing ({name}): {value['n_slices']} slices in {value['time_seconds']*1000:.2f} ms")
    print(f"  Volume queries: {results['volume_queries']['queries_per_second']:.0f} /s")
    print(f"  Overlay: {results['overlay_pressure']['overlay_time_seconds']*1000:.2f} ms")
    return results


if __name__ == "__main__":
    run_all_volume_benchmarks()
