"""Tests for the identity (alias) table."""

from linkgraph.resolve import IdentityResolver, find_file_id


def test_find_file_id_reads_first_marker_line() -> None:
    """The first ``id:`` line wins, wherever it is in the text."""
    content = "# Title\n\nid: first\nbody\nid: second\n"

    assert find_file_id(content) == "first"


def test_find_file_id_handles_crlf_and_missing_marker() -> None:
    """CRLF endings are tolerated; text without a marker declares nothing."""
    assert find_file_id("# Title\r\nid: crlf\r\n") == "crlf"
    assert find_file_id("# Title\nidentifier: nope\n") is None
    assert find_file_id("id:\nnext line") is None


def test_learn_registers_id_and_file_names() -> None:
    """Explicit id, file name and stem resolve to the document."""
    resolver = IdentityResolver()

    aliases = resolver.learn("/docs/note-one.md", "id: note1\n# Note")

    assert aliases == ["note1", "note-one.md", "note-one"]
    for alias in aliases:
        assert resolver.resolve_alias(alias) == ["/docs/note-one.md"]


def test_learn_without_marker_registers_file_names_only() -> None:
    """Documents without a marker still get file-name aliases."""
    resolver = IdentityResolver()

    aliases = resolver.learn("/docs/plain.md", "# Plain")

    assert aliases == ["plain.md", "plain"]
    assert len(resolver) == 2
    assert "/docs/plain.md" not in resolver


def test_unknown_alias_resolves_to_itself() -> None:
    """Lookups never fail; unknown names come back unchanged."""
    resolver = IdentityResolver()

    assert resolver.resolve_alias("missing") == ["missing"]
    assert resolver.lookup("missing") is None
    assert "missing" not in resolver


def test_last_writer_wins_on_shared_alias() -> None:
    """Two documents with the same stem: the later one owns the alias."""
    resolver = IdentityResolver()
    resolver.learn("/ws/a/readme.md", "# A")
    resolver.learn("/ws/b/readme.md", "# B")

    assert resolver.lookup("readme") == "/ws/b/readme.md"
    assert resolver.lookup("readme.md") == "/ws/b/readme.md"


def test_relearning_keeps_previous_aliases() -> None:
    """Removing an id marker does not drop the old alias."""
    resolver = IdentityResolver()
    resolver.learn("/ws/a.md", "id: alpha\n# A")

    resolver.learn("/ws/a.md", "# A")

    assert resolver.lookup("alpha") == "/ws/a.md"


def test_forget_drops_all_aliases_of_path() -> None:
    """Forgetting a deleted document removes only its aliases."""
    resolver = IdentityResolver()
    resolver.learn("/ws/a.md", "id: alpha\n# A")
    resolver.learn("/ws/b.md", "# B")

    removed = resolver.forget("/ws/a.md")

    assert removed == 3
    assert resolver.aliases_for("/ws/a.md") == []
    assert sorted(resolver) == ["b", "b.md"]
