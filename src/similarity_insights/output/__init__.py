"""
Output module.

Delimited text exports of analytics, interventions and the triage queue.
"""

from .csv_export import (
    export_analytics_csv,
    export_interventions_csv,
    export_priority_ranking_csv,
)

__all__ = [
    "export_analytics_csv",
    "export_interventions_csv",
    "export_priority_ranking_csv",
]
