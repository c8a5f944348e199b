"""Tests for sentier.routing.locales: alternative filtering by locale."""

from sentier.routing.locales import accepts, narrow, resulting, serves


class TestAccepts:
    def test_anything_accepted(self) -> None:
        assert accepts(None, ())
        assert accepts(None, ("en", "fr"))

    def test_locale_free_route(self) -> None:
        assert accepts(("en", "fr"), ())

    def test_overlap(self) -> None:
        assert accepts(("en", "fr"), ("en", "fr"))
        assert accepts(("en", "fr"), ("en",))
        assert accepts(("en", "fr"), ("fr", "es"))

    def test_no_overlap(self) -> None:
        assert not accepts(("en", "fr"), ("es",))


class TestNarrow:
    def test_unrestricted(self) -> None:
        assert narrow(None, ()) is None
        assert narrow(None, ("en", "fr")) == ("en", "fr")

    def test_locale_free_route_keeps_accepted(self) -> None:
        assert narrow(("en", "fr"), ()) == ("en", "fr")

    def test_intersection(self) -> None:
        assert narrow(("en", "fr"), ("en", "fr")) == ("en", "fr")
        assert narrow(("en", "fr"), ("en", "es")) == ("en",)


class TestResulting:
    def test_nothing_constrains(self) -> None:
        assert resulting(None, ()) == ()

    def test_route_locales(self) -> None:
        assert resulting(None, ("en", "fr")) == ("en", "fr")

    def test_accepted_locales(self) -> None:
        assert resulting(("en", "fr"), ()) == ("en", "fr")

    def test_intersection(self) -> None:
        assert resulting(("en", "fr"), ("en", "es")) == ("en",)


class TestServes:
    def test_locale_free_serves_everything(self) -> None:
        assert serves((), None)
        assert serves((), "es")

    def test_localized(self) -> None:
        assert serves(("en", "fr"), "fr")
        assert not serves(("en", "fr"), "es")
        assert not serves(("en", "fr"), None)
