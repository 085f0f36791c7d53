"""Tests for the session: loading, caching, resource lookup and navigation."""

import re

from citenav.models import ContainerScope, Direction, NoteKind, RawMatch
from citenav.session import Session


class FakeSearch:
    """Searches an in-memory {file: [lines]} corpus."""

    def __init__(self, corpus):
        self.corpus = corpus
        self.searches = 0

    def _hits(self, rx, files):
        out = []
        for f in files:
            for i, line in enumerate(self.corpus[f], start=1):
                for m in rx.finditer(line):
                    out.append(RawMatch(file=f, line=i, summary=line[m.start():]))
        return out

    def search(self, pattern, scope):
        self.searches += 1
        return self._hits(re.compile(pattern), list(self.corpus))

    def search_within(self, pattern, files):
        return self._hits(re.compile(pattern), [f for f in files if f in self.corpus])


class FakeBibliography:
    def __init__(self, files, urls=None):
        self._files = files
        self._urls = urls or {}

    def files(self):
        return self._files

    def urls(self):
        return self._urls


class FakePlayer:
    def __init__(self, path):
        self.path = path
        self.seeks = []

    def seek(self, resource, timestamp):
        self.seeks.append((resource, timestamp))

    def current_path(self):
        return self.path


CORPUS = {
    "/notes/reading.org": [
        "* Smith",
        "- strong claim [cite:@smith2020 p. 12]",
        "- see also [cite:@smith2020 p. 3] [[(0.2 0.4)][p. 3]]",
        "- TODO compare with [cite:@doe99 p. 7]",
    ],
    "/notes/talks.org": [
        "- intro [[cite:@talk21 %2Fmedia%2Ftalk.mp4][0:05:00]]",
        "- key point [[cite:@talk21 %2Fmedia%2Ftalk.mp4][0:01:30]]",
        "- TODO rewatch [cite:@smith2020 p. 1]",
    ],
}

BIB = FakeBibliography(
    files={"smith2020": ["/papers/smith2020.pdf"], "talk21": ["/media/talk.mp4"]},
    urls={"doe99": ["https://example.org/doe99"]},
)


def make_session(**kwargs) -> Session:
    return Session(search=FakeSearch(CORPUS), scope="/notes", bibliography=BIB, **kwargs)


class TestLoadCitekey:
    def test_notes_across_files_sorted(self):
        s = make_session()
        c = s.load_citekey("smith2020")
        assert c.kind is NoteKind.DOCUMENT
        assert [n.locator for n in c.notes] == [1, 3, 12]
        assert c.resources == ["/papers/smith2020.pdf"]

    def test_cached(self):
        s = make_session()
        first = s.load_citekey("smith2020")
        again = s.load_citekey("smith2020")
        assert again is first
        assert s.search.searches == 1

    def test_reload_keeps_identity(self):
        s = make_session()
        first = s.load_citekey("smith2020")
        again = s.load_citekey("smith2020", reload=True)
        assert again is first
        assert s.search.searches == 2

    def test_unknown_citekey_is_empty(self):
        s = make_session()
        c = s.load_citekey("nobody")
        assert c.note_count == 0
        assert c.active_note_index is None

    def test_media_order(self):
        s = make_session()
        c = s.load_citekey("talk21")
        assert c.kind is NoteKind.MEDIA
        assert [n.precise_locator for n in c.notes] == ["0:01:30", "0:05:00"]

    def test_note_files_indexed(self):
        s = make_session()
        s.load_citekey("smith2020")
        s.load_citekey("doe99")
        assert s.citekeys_for_note_file("/notes/reading.org") == ["smith2020", "doe99"]


class TestSharedLines:
    def test_each_citekey_keeps_its_own_locator(self):
        corpus = {"/notes/mixed.org": [
            "See [cite:@a] and also [cite:@b p. 5]",
            "[cite:@a p. 3] vs [[cite:@b talk.mp4][1:00:00]]",
        ]}
        s = Session(search=FakeSearch(corpus), scope="/notes")
        a = s.load_citekey("a")
        assert a.kind is NoteKind.PLAIN
        assert [(n.kind, n.locator) for n in a.notes] == [
            (NoteKind.PLAIN, None),
            (NoteKind.DOCUMENT, 3),
        ]
        b = s.load_citekey("b")
        assert [(n.kind, n.precise_locator) for n in b.notes] == [
            (NoteKind.DOCUMENT, None),
            (NoteKind.MEDIA, "1:00:00"),
        ]


class TestPatternContainers:
    def test_load_pattern(self):
        s = make_session()
        c = s.load_pattern(r"TODO")
        assert c.scope is ContainerScope.PATTERN
        assert c.note_count == 2
        assert s.active is c

    def test_search_within_active(self):
        s = make_session()
        s.select("doe99")
        c = s.search_within(r"cite:@smith2020")
        assert [n.file for n in c.notes] == ["/notes/reading.org", "/notes/reading.org"]

    def test_search_within_without_active(self):
        assert make_session().search_within("x") is None


class TestOpenResource:
    def test_open_known_resource(self):
        s = make_session()
        c = s.open_resource("/papers/smith2020.pdf")
        assert c.key == "smith2020"
        assert c.active_resource == "/papers/smith2020.pdf"
        assert s.active is c
        assert s.current().position == 1

    def test_open_unknown_resource(self):
        s = make_session()
        assert s.open_resource("/papers/unknown.pdf") is None
        assert s.active is None

    def test_follow_player_and_seek(self):
        s = make_session()
        player = FakePlayer("/media/talk.mp4")
        c = s.follow_player(player)
        assert c.key == "talk21"
        s.advance(Direction.LAST)
        s.jump(player=player)
        assert player.seeks == [("/media/talk.mp4", "0:05:00")]

    def test_follow_idle_player(self):
        assert make_session().follow_player(FakePlayer(None)) is None


class TestNavigation:
    def test_walk_and_resume(self):
        s = make_session()
        s.select("smith2020")
        assert s.advance(Direction.NEXT).note.locator == 3
        assert s.advance(Direction.NEXT).note.locator == 12
        assert s.advance(Direction.NEXT).note.locator == 12
        s.select("talk21")
        assert s.current().position == 1
        s.select("smith2020")
        assert s.current().position == 3

    def test_no_active(self):
        s = make_session()
        assert s.advance(Direction.NEXT) is None
        assert s.jump() is None


class TestCitations:
    def test_page_citation_for_resource(self):
        s = make_session()
        assert s.page_citation("/papers/smith2020.pdf", 5) == "[cite:@smith2020 p. 5]"

    def test_media_citation_for_resource(self):
        s = make_session()
        out = s.media_citation("/media/talk.mp4", "0:07:00")
        assert out == "[[cite:@talk21 %2Fmedia%2Ftalk.mp4][0:07:00]]"

    def test_citation_for_unknown_resource(self):
        s = make_session()
        assert s.page_citation("nope.pdf", 1) is None
        assert s.media_citation("nope.mp4", "0:01") is None
