# netfrag/io/reports.py

from dataclasses import dataclass


# Base type for report records handed to a Reporter
@dataclass
class Report:
    run_id: str
    name: str  # stable report name


@dataclass
class OversizedComponent(Report):
    index: int  # discovery order, 1-based
    root_id: int
    size: int


@dataclass
class ConnectivitySummary(Report):
    components: int
    oversized: int
    points: int
    sequences: int
    isolated_points: int = 0
