from mail_gate import Status


class TestStatus:

    def test_good_status_is_ok(self):
        status = Status.good()
        assert status.is_ok()
        assert status.errors == []
        assert status.text == ""

    def test_fatal_status_carries_message(self):
        status = Status.fatal("bad key")
        assert not status.is_ok()
        assert status.text == "bad key"

    def test_merge_good_into_good_stays_ok(self):
        status = Status.good().merge(Status.good())
        assert status.is_ok()

    def test_merge_fatal_makes_status_fail(self):
        status = Status.good().merge(Status.fatal("oops"))
        assert not status.is_ok()
        assert status.errors == ["oops"]

    def test_merge_concatenates_errors_in_order(self):
        status = Status.fatal("first")
        status.merge(Status.good()).merge(Status.fatal("second"))
        assert status.errors == ["first", "second"]
        assert status.text == "first\nsecond"

    def test_merge_returns_self(self):
        status = Status.good()
        assert status.merge(Status.fatal("x")) is status
