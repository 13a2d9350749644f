"""
Builder wizard orchestration.

- WorkflowController: step navigation, edits and save for one wizard session
- NoticeChannel: the controller's outbound user notices
- WizardSessionStore: open sessions, keyed by id and scoped to their owner
"""

from application.wizard.controller import WorkflowController
from application.wizard.notices import Notice, NoticeChannel, NoticeLevel
from application.wizard.session_store import WizardSession, WizardSessionStore

__all__ = [
    "WorkflowController",
    "Notice",
    "NoticeChannel",
    "NoticeLevel",
    "WizardSession",
    "WizardSessionStore",
]
