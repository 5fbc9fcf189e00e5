"""Example: Mud placement, volumes and U-tube pressures.

Builds a 6000 m well, places a typical slug-and-kill mud program in the
string and annulus, and reports volumes, hydrostatic pressures and the
barite needed to weight up the active system.
"""

import logging

from wellsmith.config import ConfigManager, configure_logging
from wellsmith.objects import MudStep, Placement, SurveyStation
from wellsmith.tasks import WellModel

MUD_PROGRAM = [
    MudStep("Annulus Kill", 687, 1010, 1800, Placement.ANNULUS, color="#FF3B30"),
    MudStep("Active Mud", 1010, 2701, 1260, Placement.ANNULUS, color="#8E8E93"),
    MudStep("Lube Blend", 2701, 6000, 1260, Placement.BOTH, color="#FFCC00"),
    MudStep("Active Mud", 2040, 2701, 1260, Placement.STRING, color="#8E8E93"),
    MudStep("Balance Slug", 1705, 2040, 1800, Placement.STRING, color="#FF9500"),
    MudStep("Active Mud", 596, 1705, 1260, Placement.STRING, color="#8E8E93"),
    MudStep("Dry Pipe Slug", 220, 596, 2100, Placement.STRING, color="#AF52DE"),
    MudStep("Air", 0, 221, 1.2, Placement.STRING, color="#FFFFFF"),
]


def main():
    """Run mud placement example."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    config = ConfigManager({"logging": {"level": "INFO"}})
    configure_logging(config)

    print("=" * 60)
    print("Mud Placement Example")
    print("=" * 60)

    # 1. Geometry
    print("\n1. Building well geometry...")
    well = WellModel(
        name="Example-1", config=config, tank_volume=60.0, surface_line_volume=3.0
    )
    well.add_annulus(
        inner_diameter=0.2245,
        length=1500,
        outer_diameter=0.2445,
        is_cased=True,
        name='9 5/8" casing',
    )
    well.add_annulus(inner_diameter=0.2159, length=4500, name='8 1/2" hole')
    well.add_pipe(length=5800, name='5" DP')
    well.add_pipe(length=200, inner_diameter=0.0714, outer_diameter=0.1651, name='6 1/2" DC')
    well.surveys = [
        SurveyStation(0, 0),
        SurveyStation(1500, 1500),
        SurveyStation(3500, 3150),
        SurveyStation(6000, 4900),
    ]
    print(well)
    print(well.sections_frame("pipe")[["name", "top", "bottom", "capacity", "displacement"]])

    # 2. Volumes
    print("\n2. Volumes...")
    totals = well.totals()
    print(f"String capacity:       {totals.string_capacity:8.2f} m³")
    print(f"Annulus (pipe in):     {totals.annular_with_pipe:8.2f} m³")
    print(f"Open hole:             {totals.open_hole:8.2f} m³")
    print(f"Circulating system:    {totals.total_circulating_volume:8.2f} m³")

    shoe = well.volumes_between(1400, 1600)
    print(f"Across the shoe: annulus {shoe.annular_per_meter * 1000:.2f} L/m")

    balanced = well.equal_volume(5700, 6000)
    print(
        f"Open-hole volume below 5700 m fills {balanced.length:.1f} m "
        f"with pipe in (top of mud at {balanced.mud_top:.1f} m)"
    )

    # 3. Placement
    print("\n3. Placing mud program...")
    for step in MUD_PROGRAM:
        well.add_step(step)
    well.rebuild_layers()
    print(well.layers_frame()[["domain", "name", "top", "bottom", "density", "volume"]])

    # 4. Pressures
    print("\n4. Hydrostatic pressures...")
    for depth in (1000.0, 3200.0, 6000.0):
        result = well.hydrostatic(depth)
        print(
            f"MD {depth:6.0f} m (TVD {result.depth_tvd:6.0f} m): "
            f"annulus {result.annulus:8.0f} kPa, string {result.string:8.0f} kPa, "
            f"differential {result.differential:7.0f} kPa"
        )

    # 5. Mixing
    print("\n5. Weighting up the active system...")
    req = well.barite_for(1380.0)
    print(f"Barite: {req.barite_per_m3:.1f} kg/m³, {req.total_mass / 1000:.1f} t, {req.sacks} sacks")

    print("\n✓ Example completed")


if __name__ == "__main__":
    main()
