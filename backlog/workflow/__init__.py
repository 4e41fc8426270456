"""
Interactive navigation: screens, actions, the screen state machine and the
navigator that dispatches actions into the store.
"""

from backlog.workflow.navigator import ActionFailed, IllegalAction, Navigator
from backlog.workflow.prompts import ConsolePrompts, ItemDraft, Prompts, ScriptedPrompts
from backlog.workflow.screens import EpicDetail, Home, InvalidInput, ScreenRenderError, StoryDetail

__all__ = [
    "ActionFailed",
    "IllegalAction",
    "Navigator",
    "ConsolePrompts",
    "ItemDraft",
    "Prompts",
    "ScriptedPrompts",
    "EpicDetail",
    "Home",
    "InvalidInput",
    "ScreenRenderError",
    "StoryDetail",
]
