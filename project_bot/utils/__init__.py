"""
Utility modules for the Discord Project Bot.
"""

from .logging import get_logger, WorkflowLog
from .text_utils import format_error_message, split_message
from .message_templates import MessageTemplates, ProjectSummary

__all__ = [
    "get_logger",
    "WorkflowLog",
    "format_error_message",
    "split_message",
    "MessageTemplates",
    "ProjectSummary",
]
