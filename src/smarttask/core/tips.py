"""Rule-based productivity tips."""

from datetime import datetime

from .tasks import Priority, Task, filter_overdue, pending

HIGH_BACKLOG_THRESHOLD = 2
MOMENTUM_THRESHOLD = 3

ALL_CLEAR_TIP = "✨ All clear! Perfect time to plan ahead."
FALLBACK_TIP = "💡 Try the 2-minute rule: if a task takes under 2 minutes, do it now."

STRATEGY_TIPS = (
    "🧠 Use time-blocking: schedule your highest-priority task first thing.",
    "🍅 Try the Pomodoro Technique: 25 min focused work, 5 min break.",
    "📌 Limit your daily 'must-do' list to 3 critical tasks.",
    "⚡ Batch similar tasks together to reduce context-switching.",
    "🌙 Review and plan tomorrow's tasks the night before.",
    "🚫 Say no to low-value work when you have high-priority tasks pending.",
)


def productivity_tip(tasks: list[Task], now: datetime | None = None) -> str:
    """
    Pick one coaching message. Rules are checked in order, first match wins:

    1. overdue tasks exist
    2. more than two high-priority tasks pending
    3. three or more tasks completed today
    4. nothing pending
    5. generic fallback
    """
    now = now or datetime.now()
    open_tasks = pending(tasks)

    overdue = len(filter_overdue(open_tasks, now))
    if overdue > 0:
        noun = "task" if overdue == 1 else "tasks"
        return f"⚠️ You have {overdue} overdue {noun}. Tackle them first!"

    high_pending = sum(1 for t in open_tasks if t.priority_level is Priority.HIGH)
    if high_pending > HIGH_BACKLOG_THRESHOLD:
        return f"🔥 {high_pending} high-priority tasks pending. Consider time-blocking your day."

    completed_today = sum(1 for t in tasks if t.completed_on(now.date()))
    if completed_today >= MOMENTUM_THRESHOLD:
        return f"🎉 Great momentum! You've completed {completed_today} tasks today."

    if not open_tasks:
        return ALL_CLEAR_TIP

    return FALLBACK_TIP
