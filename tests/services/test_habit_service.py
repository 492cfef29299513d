"""HabitService — validation gate, not-found classification, streak and archival flows.

Invariants:
    - Rejected habits are never persisted (count unchanged)
    - delete/update/complete on an unknown id raise HabitNotFoundError
    - complete_today follows the consecutive/gap/same-day rule and persists
    - archive_inactive_habits archives only active, stale-or-never-completed habits
"""

from datetime import date, datetime, timedelta

import pytest

from habit_tracker.core.domain_types import Frequency
from habit_tracker.core.errors import HabitNotFoundError, HabitValidationError
from habit_tracker.core.habit import Habit


# --- Save & validation ------------------------------------------------------------

def test_save_trims_name_and_assigns_id(service, make_habit):
    """Saving trims the name and assigns the first id."""
    saved = service.save(make_habit("  Meditate  "))
    assert saved.id == 1
    assert saved.name == "Meditate"


@pytest.mark.parametrize("target", [0, 8])
def test_save_rejects_target_out_of_range(service, make_habit, target):
    """Out-of-range targets are never persisted."""
    with pytest.raises(HabitValidationError):
        service.save(make_habit(target_per_week=target))
    assert service.count() == 0


def test_save_rejects_blank_name(service, make_habit):
    """Blank names are never persisted."""
    with pytest.raises(HabitValidationError, match="name"):
        service.save(make_habit("   "))
    assert service.count() == 0


def test_save_all_rejects_whole_batch_on_one_invalid(service, make_habit):
    """One invalid habit rejects the whole batch."""
    batch = [make_habit("Good"), make_habit(""), make_habit("Also good")]
    with pytest.raises(HabitValidationError):
        service.save_all(batch)
    assert service.count() == 0


def test_save_all_persists_in_order(service, make_habit):
    """A valid batch is saved in order."""
    saved = service.save_all([make_habit("A"), make_habit("B")])
    assert [h.id for h in saved] == [1, 2]


def test_save_all_none_is_empty(service):
    """None input yields an empty result, not an error."""
    assert service.save_all(None) == ()


def test_save_rejects_overlong_name(service):
    """Field limits hold for callers that bypass the HTTP schema."""
    with pytest.raises(HabitValidationError) as exc:
        service.save(Habit(name="x" * 250))
    assert exc.value.field == "name"
    assert service.count() == 0


def test_save_rejects_overlong_description(service, make_habit):
    """Descriptions over the limit never reach the store."""
    with pytest.raises(HabitValidationError) as exc:
        service.save(make_habit(description="d" * 900))
    assert exc.value.field == "description"
    assert service.count() == 0


def test_save_rejects_future_dates(service, make_habit):
    """Future completion or creation times are rejected before persisting."""
    with pytest.raises(HabitValidationError):
        service.save(make_habit(last_completed=date.today() + timedelta(days=1)))
    with pytest.raises(HabitValidationError):
        service.save(make_habit(created_at=datetime.now() + timedelta(days=30)))
    assert service.count() == 0


def test_update_rejects_overlong_name(service, make_habit):
    """update() applies the same field limits as save()."""
    saved = service.save(make_habit("Read"))
    with pytest.raises(HabitValidationError):
        service.update(saved.id, make_habit("y" * 101))
    assert service.find_by_id(saved.id).name == "Read"


# --- Update & delete -------------------------------------------------------------------

def test_update_replaces_fields_and_keeps_created_at(service, make_habit):
    """Update replaces fields but keeps creation time."""
    original = service.save(make_habit("Read"))
    updated = service.update(
        original.id, Habit(name="Read daily", frequency=Frequency.WEEKLY, target_per_week=3),
    )
    assert updated.id == original.id
    assert updated.name == "Read daily"
    assert updated.frequency == Frequency.WEEKLY
    assert updated.created_at == original.created_at
    assert service.count() == 1


def test_update_unknown_id_raises_not_found(service, make_habit):
    """Updating an unknown id is not-found, nothing saved."""
    with pytest.raises(HabitNotFoundError) as exc:
        service.update(7, make_habit())
    assert exc.value.http_status == 404
    assert service.count() == 0


def test_update_invalid_payload_rejected(service, make_habit):
    """An invalid replacement leaves the stored habit as is."""
    saved = service.save(make_habit("Read"))
    with pytest.raises(HabitValidationError):
        service.update(saved.id, make_habit(frequency=None))
    assert service.find_by_id(saved.id).frequency == Frequency.DAILY


def test_delete_existing(service, make_habit):
    """Deleting a stored habit removes it."""
    saved = service.save(make_habit())
    service.delete_by_id(saved.id)
    assert not service.exists_by_id(saved.id)


def test_delete_unknown_raises_not_found(service):
    """Deleting an unknown id is not-found."""
    with pytest.raises(HabitNotFoundError, match="Habit 99 not found"):
        service.delete_by_id(99)


# --- Isolation -----------------------------------------------------------------------

def test_mutating_read_result_does_not_leak(service, make_habit):
    """Changes to loaded habits do not reach the store."""
    saved = service.save(make_habit("Read"))
    loaded = service.find_by_id(saved.id)
    loaded.name = "Hacked"
    loaded.current_streak = 50
    again = service.find_by_id(saved.id)
    assert again.name == "Read"
    assert again.current_streak == 0


def test_delete_all_then_next_save_gets_first_id(service, store, make_habit):
    """Ids restart at 1 after a full reset."""
    service.save(make_habit("A"))
    service.save(make_habit("B"))
    store.delete_all()
    assert service.save(make_habit("C")).id == 1


# --- Derived views -------------------------------------------------------------------

def test_search_name_or_description(service):
    """Search matches name or description."""
    service.save(Habit(name="Morning Run", description="Exercise"))
    service.save(Habit(name="Evening Read", description="Book"))
    service.save(Habit(name="Run Errands", description="Chores"))
    assert [h.name for h in service.search("run")] == ["Morning Run", "Run Errands"]


def test_search_none_returns_all(service, make_habit):
    """A None query returns every habit."""
    service.save(make_habit("A"))
    service.save(make_habit("B"))
    assert len(service.search(None)) == 2


def test_group_and_count_by_frequency(service, make_habit):
    """Groups and counts agree with the store."""
    service.save(make_habit("A"))
    service.save(make_habit("B", frequency=Frequency.WEEKLY))
    service.save(make_habit("C", frequency=Frequency.WEEKLY))
    groups = service.group_by_frequency()
    counts = service.count_by_frequency()
    assert [h.name for h in groups[Frequency.WEEKLY]] == ["B", "C"]
    assert counts == {Frequency.DAILY: 1, Frequency.WEEKLY: 2}
    assert sum(counts.values()) == service.count()


def test_count_by_archived(service, make_habit):
    """Archived counts partition the store."""
    service.save(make_habit("A"))
    service.save(make_habit("B", archived=True))
    counts = service.count_by_archived()
    assert counts == {False: 1, True: 1}
    assert sum(counts.values()) == service.count()


def test_query_pass_throughs(service, make_habit, today):
    """Store filters are exposed unchanged."""
    service.save(make_habit("Streaky", current_streak=4, best_streak=6, last_completed=today))
    service.save(make_habit("Lapsed", last_completed=today - timedelta(days=20)))
    assert [h.name for h in service.find_streak_greater_than(4)] == ["Streaky"]
    assert [h.name for h in service.find_best_streak_at_least(6)] == ["Streaky"]
    assert [h.name for h in service.find_completed_on(today)] == ["Streaky"]
    assert [h.name for h in service.find_overdue(today)] == ["Lapsed"]
    assert [h.name for h in service.find_by_name_containing("laps")] == ["Lapsed"]
    assert len(service.find_by_archived(False)) == 2
    assert len(service.find_by_frequency(Frequency.DAILY)) == 2
    assert service.find_created_today(today) == ()


# --- complete_today ---------------------------------------------------------------------

def test_complete_today_consecutive_day(service, make_habit, today):
    """Consecutive completion extends and persists the streak."""
    saved = service.save(make_habit(
        current_streak=4, best_streak=4, last_completed=today - timedelta(days=1),
    ))
    result = service.complete_today(saved.id, today)
    assert result.current_streak == 5
    assert result.best_streak >= 5
    assert service.find_by_id(saved.id).current_streak == 5


def test_complete_today_after_gap(service, make_habit, today):
    """A gap restarts the streak and keeps the best."""
    saved = service.save(make_habit(
        current_streak=2, best_streak=3, last_completed=today - timedelta(days=3),
    ))
    result = service.complete_today(saved.id, today)
    assert result.current_streak == 1
    assert result.best_streak == 3
    assert result.last_completed == today


def test_complete_today_twice_is_idempotent(service, make_habit, today):
    """A second completion on the same day changes nothing."""
    saved = service.save(make_habit(last_completed=today - timedelta(days=1), current_streak=1))
    first = service.complete_today(saved.id, today)
    second = service.complete_today(saved.id, today)
    assert first.current_streak == second.current_streak == 2


def test_complete_today_unknown_raises_not_found(service):
    """Completing an unknown id is not-found."""
    with pytest.raises(HabitNotFoundError):
        service.complete_today(5)


def test_reset_streak_persists(service, make_habit):
    """Reset is stored and keeps best_streak."""
    saved = service.save(make_habit(current_streak=3, best_streak=3))
    result = service.reset_streak(saved.id)
    assert result.current_streak == 0
    assert service.find_by_id(saved.id).best_streak == 3


# --- Archival ---------------------------------------------------------------------------

def test_set_archived_round_trip(service, make_habit):
    """Archived flag can be set and cleared."""
    saved = service.save(make_habit())
    assert service.set_archived(saved.id, True).archived is True
    assert service.find_by_id(saved.id).archived is True
    assert service.set_archived(saved.id, False).archived is False


def test_set_archived_unknown_raises_not_found(service):
    """Archiving an unknown id is not-found."""
    with pytest.raises(HabitNotFoundError):
        service.set_archived(3, True)


def test_archive_inactive_habits(service, make_habit, today):
    """Stale and never-completed habits are archived and counted."""
    a = service.save(make_habit("A", last_completed=today))
    b = service.save(make_habit("B", last_completed=today - timedelta(days=30)))
    c = service.save(make_habit("C"))

    archived = service.archive_inactive_habits(7, today)

    assert archived == 2
    assert service.find_by_id(a.id).archived is False
    assert service.find_by_id(b.id).archived is True
    assert service.find_by_id(c.id).archived is True


def test_archive_inactive_skips_already_archived(service, make_habit, today):
    """Archived habits are not counted again."""
    service.save(make_habit("Old", archived=True))
    service.save(make_habit("Never"))
    assert service.archive_inactive_habits(1, today) == 1
    assert service.archive_inactive_habits(1, today) == 0


@pytest.mark.parametrize("days", [0, -1])
def test_archive_inactive_rejects_non_positive_window(service, days):
    """Windows below one day are rejected."""
    with pytest.raises(HabitValidationError):
        service.archive_inactive_habits(days)
