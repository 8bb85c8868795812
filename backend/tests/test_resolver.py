"""
Representative h-card resolution tests

Items are built directly, except for the TestParsedPages cases which go
through mf2py.
"""

from hcard.models import (
    IdentityCard,
    NamedValue,
    OtherValue,
    PlainString,
    StructuredItem,
    property_value,
)
from hcard.parsing import parse_page
from hcard.resolver import card_from_item, match_urls, resolve

PAGE = "https://alice.example/"


def item(types=("h-card",), **props) -> StructuredItem:
    return StructuredItem(
        types=frozenset(types),
        properties={name: (property_value(value),) for name, value in props.items()},
    )


class TestPropertyValue:

    def test_plain_string(self):
        assert property_value("Alice") == PlainString("Alice")

    def test_named_value(self):
        assert property_value({"value": "https://a.example/me.jpg", "alt": ""}) == NamedValue("https://a.example/me.jpg")

    def test_other_shapes_read_as_empty(self):
        assert property_value({"html": "<b>x</b>"}) == OtherValue()
        assert property_value(42).value == ""

    def test_missing_property_is_empty_string(self):
        assert item(name="Alice").string("photo") == ""


class TestMatchUrls:

    def test_equal(self):
        assert match_urls("https://a.example/", "https://a.example/")

    def test_different(self):
        assert not match_urls("https://a.example/", "https://a.example")

    def test_unparsable_never_matches(self):
        assert not match_urls("http://[::1", "http://[::1")


class TestResolve:

    def test_uid_url_self_match_wins_over_earlier_card(self):
        unrelated = item(name="Bob", url="https://bob.example/")
        owner = item(name="Alice", url=PAGE, uid=PAGE)

        assert resolve([unrelated, owner], PAGE) is owner

    def test_uid_self_match_preferred_over_rel_me(self):
        corroborated = item(name="Alt", url="https://social.example/alice")
        owner = item(name="Alice", url=PAGE, uid=PAGE)

        result = resolve([corroborated, owner], PAGE, ["https://social.example/alice"])

        assert result is owner

    def test_uid_must_match_page(self):
        card = item(url="https://bob.example/", uid="https://bob.example/")
        other = item(url="https://carol.example/")

        assert resolve([card, other], PAGE) is None

    def test_rel_me_match(self):
        other = item(name="Bob", url="https://bob.example/")
        alice = item(name="Alice", url="https://social.example/alice")

        result = resolve([other, alice], PAGE, ["https://github.com/alice", "https://social.example/alice"])

        assert result is alice

    def test_singleton_with_page_url(self):
        only = item(name="Alice", url=PAGE)

        assert resolve([only], PAGE) is only

    def test_singleton_with_other_url(self):
        only = item(name="Alice", url="https://elsewhere.example/")

        assert resolve([only], PAGE) is None

    def test_two_cards_without_evidence(self):
        assert resolve([item(url=PAGE), item(url=PAGE)], PAGE) is None

    def test_non_hcard_items_ignored(self):
        entry = item(types=("h-entry",), url=PAGE, uid=PAGE)
        only = item(name="Alice", url=PAGE)

        assert resolve([entry, only], PAGE) is only

    def test_no_candidates(self):
        assert resolve([], PAGE) is None


class TestCardFromItem:

    def test_maps_properties(self):
        source = item(
            name="Alice",
            photo={"value": "https://alice.example/me.jpg", "alt": "Alice"},
            nickname="al",
            note="Hello",
        )

        card = card_from_item(source, PAGE)

        assert card == IdentityCard(
            source=PAGE,
            display_name="Alice",
            photo_url="https://alice.example/me.jpg",
            nickname="al",
            note="Hello",
        )

    def test_missing_properties_are_empty(self):
        card = card_from_item(item(name="Alice"), PAGE)

        assert card.photo_url == ""
        assert card.nickname == ""
        assert card.note == ""

    def test_json_wire_names(self):
        card = IdentityCard(source=PAGE, display_name="Alice", photo_url="https://alice.example/me.jpg")

        assert card.to_json() == (
            b'{"source":"https://alice.example/","pname":"Alice",'
            b'"uphoto":"https://alice.example/me.jpg"}'
        )
        assert IdentityCard.from_json(card.to_json()) == card

    def test_empty_card(self):
        assert IdentityCard().to_json() == b"{}"
        assert IdentityCard().is_empty


class TestParsedPages:

    def test_self_identified_card_from_html(self):
        html = b"""
        <html><body>
          <div class="h-card">
            <a class="p-name u-url" href="https://bob.example/">Bob</a>
          </div>
          <div class="h-card">
            <a class="p-name u-url u-uid" href="/">Alice</a>
            <img class="u-photo" src="/avatar.jpg" alt="">
            <span class="p-nickname">al</span>
          </div>
        </body></html>
        """
        page = parse_page(html, PAGE)

        result = resolve(page.all_items(), PAGE, page.rels.get("me", []))

        assert result is not None
        card = card_from_item(result, PAGE)
        assert card.display_name == "Alice"
        assert card.photo_url == "https://alice.example/avatar.jpg"
        assert card.nickname == "al"

    def test_rel_me_from_html(self):
        html = b"""
        <html><head><link rel="me" href="https://social.example/alice"></head>
        <body>
          <div class="h-card">
            <a class="p-name u-url" href="https://social.example/alice">Alice</a>
          </div>
        </body></html>
        """
        page = parse_page(html, PAGE)

        assert page.rels["me"] == ["https://social.example/alice"]
        result = resolve(page.all_items(), PAGE, page.rels["me"])
        assert result is not None
        assert result.string("name") == "Alice"

    def test_nested_author_card_is_a_candidate(self):
        html = b"""
        <html><body>
          <article class="h-entry">
            <div class="p-author h-card">
              <a class="p-name u-url" href="/">Alice</a>
            </div>
            <p class="e-content">Hello</p>
          </article>
        </body></html>
        """
        page = parse_page(html, PAGE)

        result = resolve(page.all_items(), PAGE)

        assert result is not None
        assert result.string("name") == "Alice"
