from docoutline.core.unifier import bookmarks_to_outline, toc_to_outline
from docoutline.models.epub import TocItem
from docoutline.models.outline import BookmarkNode


def test_toc_preorder_with_parent_links(check_outline) -> None:
    items = [
        TocItem(label="A", href="a.xhtml", children=[
            TocItem(label="A1", href="a.xhtml#1", children=[TocItem(label="A1x", href="a.xhtml#1x")]),
            TocItem(label="A2", href="a.xhtml#2"),
        ]),
        TocItem(label="B", href="b.xhtml"),
    ]
    outline = toc_to_outline(items)

    check_outline(outline)
    assert [(s.title, s.order_index, s.depth, s.parent_id) for s in outline.sections] == [
        ("A", 0, 0, None),
        ("A1", 1, 1, "a.xhtml"),
        ("A1x", 2, 2, "a.xhtml#1"),
        ("A2", 3, 1, "a.xhtml"),
        ("B", 4, 0, None),
    ]


def test_toc_without_href_uses_order_index() -> None:
    outline = toc_to_outline([TocItem(label="Part"), TocItem(label="Chapter", href="c.xhtml")])
    assert [(s.id, s.href) for s in outline.sections] == [("sec-0", None), ("c.xhtml", "c.xhtml")]


def test_counters_are_per_call() -> None:
    first = toc_to_outline([TocItem(label="A")])
    second = toc_to_outline([TocItem(label="B")])
    assert first.sections[0].id == second.sections[0].id == "sec-0"


def test_bookmarks(check_outline) -> None:
    nodes = [
        BookmarkNode(title="Intro", page_number=1, children=[BookmarkNode(title="Scope", page_number=2)]),
        BookmarkNode(title="Missing"),
    ]
    outline = bookmarks_to_outline(nodes)

    check_outline(outline)
    assert [(s.id, s.parent_id, s.page_start, s.href) for s in outline.sections] == [
        ("sec-0", None, 1, "page=1"),
        ("sec-1", "sec-0", 2, "page=2"),
        ("sec-2", None, None, None),
    ]


def test_deep_tree_does_not_recurse() -> None:
    root = TocItem(label="0", href="0")
    node = root
    for i in range(1, 3000):
        child = TocItem(label=str(i), href=str(i))
        node.children.append(child)
        node = child

    outline = toc_to_outline([root])
    assert len(outline) == 3000
    assert outline.sections[-1].depth == 2999


def test_empty() -> None:
    assert len(toc_to_outline([])) == 0
    assert len(bookmarks_to_outline([])) == 0


def test_generated_id_skips_taken_href(check_outline) -> None:
    outline = toc_to_outline([
        TocItem(label="A", href="sec-1"),
        TocItem(label="B", children=[TocItem(label="B1")]),
    ])

    check_outline(outline)
    ids = [s.id for s in outline.sections]
    assert ids == ["sec-1", "sec-1-1", "sec-2"]
    assert len(set(ids)) == len(ids)
    assert outline.sections[2].parent_id == "sec-1-1"
