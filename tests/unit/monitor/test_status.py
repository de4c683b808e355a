from structlog.testing import capture_logs

from sourcewatch.monitor import Status, StatusTracker


class TestStatusTracker:
    def test_starts_up(self) -> None:
        tracker = StatusTracker()

        assert tracker.status is Status.UP
        assert tracker.changed_at is None
        assert tracker.outages == 0

    def test_first_failure_warns(self) -> None:
        tracker = StatusTracker()

        with capture_logs() as logs:
            tracker.mark_down("connection refused")

        assert tracker.status is Status.DOWN
        assert logs == [
            {"event": "connection refused", "status": "down", "log_level": "warning"}
        ]

    def test_repeated_failures_log_at_info(self) -> None:
        tracker = StatusTracker()

        with capture_logs() as logs:
            tracker.mark_down("refused")
            tracker.mark_down("refused")
            tracker.mark_down("refused")

        assert [entry["log_level"] for entry in logs] == ["warning", "info", "info"]
        assert tracker.outages == 1

    def test_recovery_makes_next_failure_warn_again(self) -> None:
        tracker = StatusTracker()

        with capture_logs() as logs:
            tracker.mark_down("refused")
            tracker.mark_up()
            tracker.mark_down("refused")

        assert [entry["log_level"] for entry in logs] == ["warning", "warning"]
        assert tracker.outages == 2

    def test_mark_up_when_up_changes_nothing(self) -> None:
        tracker = StatusTracker()

        with capture_logs() as logs:
            tracker.mark_up()

        assert tracker.status is Status.UP
        assert tracker.changed_at is None
        assert logs == []

    def test_transitions_record_timestamp(self) -> None:
        tracker = StatusTracker()

        tracker.mark_down("refused")
        down_at = tracker.changed_at
        tracker.mark_up()

        assert down_at is not None
        assert tracker.changed_at is not None
        assert tracker.status is Status.UP
