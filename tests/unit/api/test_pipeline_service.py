"""Service-level tests for status transitions and tagging."""

import pytest

from api.services import tags as tag_service
from api.services.pipeline import get_status_history, transition_status
from core.exceptions import ConflictError, InvalidTransitionError, ValidationError
from database.models.applications import Application, ApplicationStatus
from tests.conftest import FakeNotifier


@pytest.fixture
async def application(db):
    record = Application(candidate_name="Ada Lovelace", candidate_email="ada@example.com")
    db.add(record)
    await db.commit()
    return record


async def test_transition_records_history(db, application):
    notifier = FakeNotifier()

    await transition_status(db, application.id, "screened", changed_by="hr-1", notifier=notifier)
    await transition_status(db, application.id, "interviewed", notes="Panel", notifier=notifier)

    history = await get_status_history(db, application.id)
    assert [h.new_status for h in history] == [
        ApplicationStatus.INTERVIEWED,
        ApplicationStatus.SCREENED,
    ]
    assert history[0].previous_status == ApplicationStatus.SCREENED
    assert history[0].notes == "Panel"
    assert history[1].changed_by == "hr-1"
    assert [c["new"] for c in notifier.changes] == ["screened", "interviewed"]
    assert notifier.changes[0]["job_title"] == "General Application"


async def test_same_status_only_touches_timestamp(db, application):
    notifier = FakeNotifier()
    before = application.updated_at

    updated = await transition_status(db, application.id, "applied", notifier=notifier)

    assert updated.updated_at > before
    assert await get_status_history(db, application.id) == []
    assert notifier.changes == []


async def test_rejected_transition_leaves_record(db, application):
    await transition_status(db, application.id, "rejected")
    stamp = application.updated_at

    with pytest.raises(InvalidTransitionError):
        await transition_status(db, application.id, "screened")
    with pytest.raises(ValidationError):
        await transition_status(db, application.id, "archived")

    assert application.status == ApplicationStatus.REJECTED
    assert application.updated_at == stamp


async def test_notifier_failure_does_not_fail_transition(db, application):
    updated = await transition_status(
        db, application.id, "offer", notifier=FakeNotifier(fail=True)
    )
    assert updated.status == ApplicationStatus.OFFER


async def test_attach_twice_conflicts(db, application):
    tag = await tag_service.create_tag(db, "React", "#06b6d4")

    await tag_service.attach_tag(db, application.id, tag.id, added_by="hr-1")
    with pytest.raises(ConflictError):
        await tag_service.attach_tag(db, application.id, tag.id)

    attached = await tag_service.get_application_tags(db, application.id)
    assert [t.name for t, _ in attached] == ["React"]
    assert await tag_service.detach_tag(db, application.id, tag.id) is True
    assert await tag_service.detach_tag(db, application.id, tag.id) is False
