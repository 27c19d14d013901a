"""
Reminder subsystem.

Components:
- reminder_models.py: notification request/trigger/response types
- reminder_scheduler.py: keeps one pending reminder per notifying to-do
- notification_center.py: in-process notification center + delivery loop
"""
