"""Functional core - pure business logic with no I/O."""

from .tasks import Priority, Task, set_completed, toggle_completed, round_half_up
from .ranking import priority_weight, score, rank_tasks, display_order
from .alerts import Alert, AlertKind, classify, collect_alerts
from .tips import STRATEGY_TIPS, productivity_tip
from .analytics import Analytics, PriorityCount, TrendPoint, completion_rate, summarize
from .dashboard import DashboardData, assemble_dashboard, compose_digest

__all__ = [
    # Tasks
    "Priority",
    "Task",
    "set_completed",
    "toggle_completed",
    "round_half_up",
    # Ranking
    "priority_weight",
    "score",
    "rank_tasks",
    "display_order",
    # Alerts
    "Alert",
    "AlertKind",
    "classify",
    "collect_alerts",
    # Tips
    "STRATEGY_TIPS",
    "productivity_tip",
    # Analytics
    "Analytics",
    "PriorityCount",
    "TrendPoint",
    "completion_rate",
    "summarize",
    # Dashboard
    "DashboardData",
    "assemble_dashboard",
    "compose_digest",
]
