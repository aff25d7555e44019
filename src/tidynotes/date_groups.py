# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from datetime import datetime, timedelta

from tidynotes.note import Note


GROUP_ORDER = ('Today', 'Yesterday', 'This Week', 'Older')


@dataclass
class GroupedNotes:
    group: str
    notes: list[Note]


def _to_datetime(timestamp_ms) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000)


def get_date_group(timestamp_ms, now=None) -> str:
    now = now or datetime.now()
    when = _to_datetime(timestamp_ms)

    if when.date() == now.date():
        return 'Today'
    if when.date() == (now - timedelta(days=1)).date():
        return 'Yesterday'
    if when >= now - timedelta(days=7):
        return 'This Week'
    return 'Older'


def group_notes_by_date(notes, now=None) -> list[GroupedNotes]:
    """Bucket notes by creation date, most recently updated first.

    Groups come in GROUP_ORDER; empty groups are left out.
    """
    buckets = {}
    for note in sorted(notes, key=lambda n: n.updated_at, reverse=True):
        buckets.setdefault(get_date_group(note.created_at, now), []).append(note)
    return [GroupedNotes(group=g, notes=buckets[g]) for g in GROUP_ORDER if g in buckets]
