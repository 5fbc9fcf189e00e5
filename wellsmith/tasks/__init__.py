"""Layer 3: Tasks - User intent translation.

Tasks translate user edits into object creation and primitive calls.
Tasks do no file I/O; loading and saving wells lives in workflows.
"""

from wellsmith.tasks.wellmodel import HydrostaticResult, WellModel

__all__ = ["HydrostaticResult", "WellModel"]
