"""
wellness_chat - Chat-driven wellness tracker.

Free-text chat messages become activity, meal, hydration, sleep and
wellbeing records; a rule engine turns the recorded history into
recommendations.
"""

__version__ = "0.1.0"
