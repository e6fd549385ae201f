"""SmartTask - personal task tracker with a rule-based prioritization engine."""
