"""
Feedback Module.

Presentation adapter for note operations.

Components:
- signals: Alert and haptic channels (Rich console, structured log)
- presenter: View state and outcome handling for a notes screen
"""
