"""Dashboard schemas."""

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    """Task counts per status for one user.

    ``total`` is the sum of the three status buckets.
    """

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
