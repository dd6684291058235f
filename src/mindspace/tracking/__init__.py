"""Continuous per-user emotion tracking.

This module contains:
- In-memory history of recent analyses per user
- Trend, key-change and cycle detection
- Risk assessment and support suggestions
"""

from mindspace.tracking.models import (
    EmotionalAssessment,
    HistoryEntry,
    KeyChange,
    RiskAssessment,
    SupportActions,
    TrendAnalysis,
    UserBaseline,
)
from mindspace.tracking.tracker import (
    ContinuousEmotionTracker,
    create_tracker,
    detect_emotional_cycles,
    detect_time_patterns,
    identify_key_changes,
)

__all__ = [
    # Tracker
    "ContinuousEmotionTracker",
    "create_tracker",
    "detect_emotional_cycles",
    "detect_time_patterns",
    "identify_key_changes",
    # Models
    "EmotionalAssessment",
    "HistoryEntry",
    "KeyChange",
    "RiskAssessment",
    "SupportActions",
    "TrendAnalysis",
    "UserBaseline",
]
