"""
CRM module for posting new Highrise recordings to Slack.
"""

from .flow import HighriseSync, next_checkpoint, sync

__all__ = ["HighriseSync", "next_checkpoint", "sync"]
