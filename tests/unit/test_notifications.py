from kanban_engine.notifications import Notification, NotificationHub, NotificationLevel


class TestNotificationHub:
    def test_subscribers_receive_notifications_in_order(self):
        hub = NotificationHub()
        received = []
        hub.subscribe(lambda n: received.append(("first", n.message)))
        hub.subscribe(lambda n: received.append(("second", n.message)))

        hub.info("Day 1")
        assert received == [("first", "Day 1"), ("second", "Day 1")]

    def test_unsubscribe(self):
        hub = NotificationHub()
        received = []
        unsubscribe = hub.subscribe(received.append)
        unsubscribe()
        unsubscribe()

        hub.warning("ignored")
        assert received == []
        assert hub.subscriber_count == 0

    def test_failing_subscriber_is_isolated(self, caplog):
        hub = NotificationHub()
        received = []

        def broken(_):
            raise RuntimeError("presenter crashed")

        hub.subscribe(broken)
        hub.subscribe(received.append)
        hub.error("still delivered")

        assert [n.message for n in received] == ["still delivered"]
        assert "failed" in caplog.text

    def test_levels_and_durations(self):
        hub = NotificationHub()
        assert hub.success("ok") == Notification(NotificationLevel.SUCCESS, "ok", 3.0)
        assert hub.warning("careful").duration == 5.0
        assert hub.publish("info", "custom", duration=1.5).duration == 1.5
