"""
Ordered-mapping editing toolkit.

Modules are grouped into the editing engine (``ordmap.mapping``), edit plan
pipelines, reporting, and configuration utilities.
"""

from .mapping import OrderedMapEditor  # noqa: F401
