"""
Water Reminder - Periodic desktop reminders to drink water.

A background daemon, supervised through a PID file, sends a notify-send
notification every few minutes. The ``water-reminder`` command starts,
stops and inspects it.
"""

__version__ = "1.0.0"
