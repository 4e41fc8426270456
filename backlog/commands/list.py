"""
backlog list - Print epics, their stories and unowned stories.
"""

from backlog.db.backends import BackendError
from backlog.db.models import Document, ItemKind
from backlog.db.store import BacklogStore
from backlog.lib.config import BacklogConfig


def _title(name: str, width: int) -> str:
    return name[:width - 3] + "..." if len(name) > width else name


def format_backlog(doc: Document) -> list[str]:
    """Plain-text listing of the whole document."""
    lines = []

    if doc.epics:
        lines.append("Epics")
        lines.append("-" * 60)
        for epic_id in sorted(doc.epics):
            epic = doc.epics[epic_id]
            lines.append(f"  {epic_id:<6} {epic.detail.status.value:<12} {_title(epic.detail.name, 40)}")
            for story_id in epic.stories:
                story = doc.stories.get(story_id)
                if story is None:
                    lines.append(f"      {story_id:<6} [missing]")
                    continue
                lines.append(f"      {story_id:<6} {story.detail.status.value:<12} {_title(story.detail.name, 36)}")
        lines.append("")
    else:
        lines.append("Epics: none")
        lines.append("")

    orphans = doc.orphan_stories()
    if orphans:
        lines.append("Stories without an epic")
        lines.append("-" * 60)
        for story_id in orphans:
            story = doc.stories[story_id]
            lines.append(f"  {story_id:<6} {story.detail.status.value:<12} {_title(story.detail.name, 40)}")
        lines.append("")

    last = doc.last_item
    if last.is_none:
        lines.append("Last item: none")
    else:
        collection = doc.epics if last.kind == ItemKind.EPIC else doc.stories
        gone = "" if last.id in collection else " (deleted)"
        lines.append(f"Last item: {last.kind.value} {last.id}{gone}")

    lines.append(f"{len(doc.epics)} epic(s), {len(doc.stories)} story(s)")
    return lines


def cmd_list(args, config: BacklogConfig) -> int:
    store = BacklogStore.from_path(config.db_path)
    try:
        doc = store.read()
    except BackendError as e:
        print(f"ERROR: {e}")
        return 1

    for line in format_backlog(doc):
        print(line)
    return 0
