"""Layer 4: Workflows - Public entry points.

Workflows provide the public entry points users call. Workflows can import
I/O libraries. Put file loading, saving and report export here.
"""

from wellsmith.workflows.welldata import (
    export_report,
    load_well,
    save_well,
    well_from_dict,
    well_report,
    well_to_dict,
)
from wellsmith.workflows.orchestrator import (
    STEP_REGISTRY,
    WorkflowOrchestrator,
    load_workflow,
    register_step,
    run_workflow,
)

__all__ = [
    "export_report",
    "load_well",
    "save_well",
    "well_from_dict",
    "well_report",
    "well_to_dict",
    "STEP_REGISTRY",
    "WorkflowOrchestrator",
    "load_workflow",
    "register_step",
    "run_workflow",
]
