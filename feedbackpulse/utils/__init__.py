"""
Utility modules for FeedbackPulse.

Cross-cutting concerns:
- Storage: File I/O helpers for insight snapshots
"""
