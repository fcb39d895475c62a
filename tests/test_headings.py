from docoutline.core.headings import Heading, build_heading_outline


def _shape(outline) -> list[tuple[str, int, str | None]]:
    return [(s.title, s.depth, s.parent_id) for s in outline.sections]


def test_parent_is_nearest_shallower_heading(check_outline) -> None:
    outline = build_heading_outline([
        Heading(1, "Book"),
        Heading(2, "Intro"),
        Heading(3, "Details"),
        Heading(2, "Body"),
        Heading(1, "Appendix"),
    ])

    check_outline(outline)
    assert _shape(outline) == [
        ("Book", 0, None),
        ("Intro", 1, "sec-0"),
        ("Details", 2, "sec-1"),
        ("Body", 1, "sec-0"),
        ("Appendix", 0, None),
    ]
    assert [s.id for s in outline.sections] == [f"sec-{i}" for i in range(5)]
    assert outline.sections[2].heading_level == 3
    assert outline.sections[2].tags == frozenset({"heading", "h3"})


def test_skipped_levels_attach_to_nearest_ancestor(check_outline) -> None:
    outline = build_heading_outline([Heading(1, "Top"), Heading(4, "Deep"), Heading(2, "Mid")])

    check_outline(outline)
    assert _shape(outline) == [("Top", 0, None), ("Deep", 1, "sec-0"), ("Mid", 1, "sec-0")]


def test_shallower_heading_forgets_deeper_levels(check_outline) -> None:
    outline = build_heading_outline([
        Heading(2, "A"),
        Heading(3, "A.1"),
        Heading(2, "B"),
        Heading(4, "B.x"),
    ])

    check_outline(outline)
    # B.x must not attach to A.1 which belongs to the previous branch
    assert outline.sections[3].parent_id == "sec-2"


def test_leading_deep_heading_is_a_root() -> None:
    outline = build_heading_outline([Heading(3, "Orphan"), Heading(1, "Title")])
    assert _shape(outline) == [("Orphan", 0, None), ("Title", 0, None)]


def test_level_range_filters_and_reparents(check_outline) -> None:
    outline = build_heading_outline(
        [Heading(1, "Doc"), Heading(2, "A"), Heading(3, "A.1"), Heading(4, "A.1.a")],
        min_level=2,
        max_level=3,
    )

    check_outline(outline)
    assert all(2 <= s.heading_level <= 3 for s in outline.sections)
    assert _shape(outline) == [("A", 0, None), ("A.1", 1, "sec-0")]


def test_inverted_range_is_empty() -> None:
    outline = build_heading_outline([Heading(1, "A"), Heading(2, "B")], min_level=4, max_level=2)
    assert len(outline) == 0


def test_natural_ids_and_duplicates() -> None:
    outline = build_heading_outline([
        Heading(1, "One", id="one", href="#one"),
        Heading(2, "Again", id="one", href="#one"),
        Heading(2, "Plain"),
    ])

    assert [(s.id, s.href) for s in outline.sections] == [
        ("one", "#one"),
        ("sec-1", "#one"),
        ("sec-2", None),
    ]
    assert outline.sections[1].parent_id == "one"


def test_without_generated_ids(check_outline) -> None:
    outline = build_heading_outline(
        [Heading(1, "A"), Heading(2, "B", id="b", href="#b"), Heading(3, "C")],
        generate_ids=False,
    )

    check_outline(outline)
    assert [s.id for s in outline.sections] == ["", "b", ""]
    # B cannot point at A, so it starts a new root
    assert [(s.depth, s.parent_id) for s in outline.sections] == [(0, None), (0, None), (1, "b")]


def test_custom_tag() -> None:
    outline = build_heading_outline([Heading(1, "A")], tag_for=lambda h: "atx")
    assert outline.sections[0].tags == frozenset({"heading", "atx"})


def test_empty_input() -> None:
    assert build_heading_outline([]).sections == []


def test_generated_id_never_reuses_a_natural_id(check_outline) -> None:
    outline = build_heading_outline([Heading(1, "A", id="sec-1", href="#sec-1"), Heading(2, "B")])

    check_outline(outline)
    assert [(s.id, s.parent_id) for s in outline.sections] == [("sec-1", None), ("sec-1-1", "sec-1")]


def test_natural_id_matching_earlier_generated_id() -> None:
    outline = build_heading_outline([Heading(1, "A"), Heading(2, "B", id="sec-0", href="#sec-0")])
    ids = [s.id for s in outline.sections]
    assert ids == ["sec-0", "sec-1"]
    assert outline.sections[1].href == "#sec-0"
