"""Global speaker-window index over all agenda items."""

from typing import Iterable

from council_transcript.core import AgendaItem, IndexedWindow


def flatten_windows(agenda_items: Iterable[AgendaItem]) -> list[IndexedWindow]:
    """Collect every speaker window, tagged with its owner, sorted by start.

    The sort is stable, so windows sharing a start keep declaration order.
    """
    indexed = [
        IndexedWindow(window=window, agenda_item_id=item.id)
        for item in agenda_items
        for window in item.speakers
    ]
    return sorted(indexed, key=lambda entry: entry.start_sec)
