from linear_samples import make_issue

from linear_app.analytics.hierarchy import build_children_map, resolve_hierarchy
from linear_app.core.models import ParentRef


def _chain():
    c = make_issue("ENG-1")
    b = make_issue("ENG-2", parent=c)
    a = make_issue("ENG-3", parent=b)
    return a, b, c


def test_levels_and_paths_follow_parent_chain():
    a, b, c = _chain()
    info = resolve_hierarchy([a, b, c])
    assert info[c.id].level == 0 and info[c.id].path == "ENG-1"
    assert info[b.id].level == 1 and info[b.id].path == "ENG-1 > ENG-2"
    assert info[a.id].level == 2 and info[a.id].path == "ENG-1 > ENG-2 > ENG-3"


def test_filtered_out_parent_demotes_to_root():
    a, b, _ = _chain()
    info = resolve_hierarchy([a, b])
    assert info[b.id].level == 0 and info[b.id].path == "ENG-2"
    assert info[a.id].level == 1 and info[a.id].path == "ENG-2 > ENG-3"


def test_self_parent_is_treated_as_root():
    issue = make_issue("ENG-9")
    issue.parent = ParentRef(id=issue.id, title=issue.title, identifier=issue.identifier)
    info = resolve_hierarchy([issue])
    assert info[issue.id].level == 0
    assert info[issue.id].path == "ENG-9"


def test_parent_cycle_terminates():
    x = make_issue("ENG-10")
    y = make_issue("ENG-11", parent=x)
    x.parent = ParentRef(id=y.id, title=y.title, identifier=y.identifier)
    z = make_issue("ENG-12", parent=y)
    info = resolve_hierarchy([x, y, z])
    assert info[x.id].level == 0 and info[x.id].path == "ENG-10"
    assert info[y.id].level == 0 and info[y.id].path == "ENG-11"
    assert info[z.id].level == 0


def test_children_map_only_lists_present_parents():
    a, b, c = _chain()
    orphan = make_issue("ENG-20", parent=make_issue("ENG-99"))
    children = build_children_map([a, b, c, orphan])
    assert children == {c.id: [b.id], b.id: [a.id]}
