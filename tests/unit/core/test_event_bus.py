"""
Unit tests for the in-memory event bus.
"""
import uuid

import pytest

from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LicenseActivated, LicenseGenerated


class Recorder:
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class Exploding:
    async def handle(self, event):
        raise RuntimeError("handler failed")


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_reaches_subscribers_of_that_type_only(self):
        bus = InMemoryEventBus()
        recorder = Recorder()
        bus.subscribe(LicenseGenerated, recorder)

        generated = LicenseGenerated(license_id=uuid.uuid4(), license_key="APP-AAAA-BBBB-CCCC")
        await bus.publish(generated)
        await bus.publish(
            LicenseActivated(license_id=uuid.uuid4(), admin_id=uuid.uuid4(), email="a@example.com")
        )

        assert recorder.events == [generated]

    async def test_duplicate_subscription_is_ignored(self):
        bus = InMemoryEventBus()
        bus.subscribe(LicenseGenerated, Recorder())
        second = Recorder()
        bus.subscribe(LicenseGenerated, second)

        await bus.publish(
            LicenseGenerated(license_id=uuid.uuid4(), license_key="APP-AAAA-BBBB-CCCC")
        )

        assert second.events == []

    async def test_failing_handler_does_not_reach_publisher(self):
        bus = InMemoryEventBus()
        recorder = Recorder()
        bus.subscribe(LicenseGenerated, Exploding())
        bus.subscribe(LicenseGenerated, recorder)

        await bus.publish(
            LicenseGenerated(license_id=uuid.uuid4(), license_key="APP-AAAA-BBBB-CCCC")
        )

        assert len(recorder.events) == 1

    async def test_clear_removes_subscriptions(self):
        bus = InMemoryEventBus()
        recorder = Recorder()
        bus.subscribe(LicenseGenerated, recorder)
        bus.clear()

        await bus.publish(
            LicenseGenerated(license_id=uuid.uuid4(), license_key="APP-AAAA-BBBB-CCCC")
        )

        assert recorder.events == []


def test_event_defaults_and_log_context():
    license_id = uuid.uuid4()
    event = LicenseActivated(license_id=license_id, admin_id=uuid.uuid4(), email="a@example.com")

    context = event.log_context()

    assert event.occurred_at is not None
    assert context["event_type"] == "LicenseActivated"
    assert context["aggregate_id"] == str(license_id)
    assert context["event_id"] == str(event.event_id)
