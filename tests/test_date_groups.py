# SPDX-License-Identifier: GPL-3.0-or-later

from datetime import datetime, timedelta

import pytest

from tidynotes.date_groups import get_date_group, group_notes_by_date
from tidynotes.note import create_note


NOW = datetime(2026, 3, 18, 15, 30)


def ms(moment):
    return int(moment.timestamp() * 1000)


def note_at(created, updated=None):
    note = create_note()
    note.created_at = ms(created)
    note.updated_at = ms(updated or created)
    return note


@pytest.mark.parametrize('moment, group', [
    (NOW.replace(hour=0, minute=1), 'Today'),
    (NOW - timedelta(days=1), 'Yesterday'),
    (NOW - timedelta(days=3), 'This Week'),
    (NOW - timedelta(days=30), 'Older'),
])
def test_get_date_group(moment, group):
    assert get_date_group(ms(moment), now=NOW) == group


def test_groups_in_canonical_order_without_empty_groups():
    old = note_at(NOW - timedelta(days=40))
    today = note_at(NOW - timedelta(hours=1))

    groups = group_notes_by_date([old, today], now=NOW)

    assert [g.group for g in groups] == ['Today', 'Older']
    assert groups[0].notes == [today]


def test_notes_sorted_by_last_update():
    early = note_at(NOW - timedelta(hours=3), NOW - timedelta(hours=2))
    late = note_at(NOW - timedelta(hours=4), NOW - timedelta(minutes=5))

    groups = group_notes_by_date([early, late], now=NOW)

    assert groups[0].notes == [late, early]
