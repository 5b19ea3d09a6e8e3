from collections import Counter

from id3py import Dataset, Internal, Leaf, build_tree, choose_best_split, construct

CAR_ROWS = [
    ("vhigh", "vhigh", "2", "2", "small", "low", "unacc"),
    ("vhigh", "vhigh", "2", "4", "small", "high", "unacc"),
    ("low", "low", "4", "4", "big", "high", "vgood"),
    ("low", "med", "4", "4", "med", "high", "good"),
    ("med", "low", "2", "4", "big", "med", "acc"),
    ("low", "low", "2", "2", "big", "high", "unacc"),
    ("high", "med", "4", "more", "med", "med", "acc"),
    ("med", "med", "4", "4", "small", "low", "unacc"),
    ("low", "low", "4", "4", "big", "high", "good"),
    ("med", "low", "2", "4", "big", "med", "unacc"),
]
CAR_COLUMNS = ("price", "maint", "doors", "persons", "lug_boot", "safety", "label")


def _car_dataset():
    return Dataset({name: [row[i] for row in CAR_ROWS] for i, name in enumerate(CAR_COLUMNS)})


def _nested_dataset():
    """persons separates at the root, safety below persons=4."""
    return Dataset({
        "safety": ["low", "low", "high", "high", "high", "high"],
        "persons": ["2", "4", "2", "4", "4", "2"],
        "label": ["unacc", "unacc", "unacc", "acc", "acc", "unacc"],
    })


def _nodes(node):
    yield node
    for edge in node.edges:
        if isinstance(edge, Internal):
            yield from _nodes(edge.child)


def _paths(node, seen=()):
    seen = seen + (node.attribute,)
    for edge in node.edges:
        if isinstance(edge, Internal):
            yield from _paths(edge.child, seen)
        else:
            yield seen


def test_construct_none_is_passthrough():
    ds = _nested_dataset()
    assert construct(None, ds) is None


def test_nested_tree_shape():
    tree = build_tree(_nested_dataset())
    assert tree.attribute == "persons"
    low, high = tree.edges
    assert isinstance(low, Leaf) and low.value == "2"
    assert low.distribution == Counter({"unacc": 3})
    assert isinstance(high, Internal) and high.value == "4"
    assert high.child.attribute == "safety"
    assert [e.value for e in high.child.edges] == ["low", "high"]
    assert all(isinstance(e, Leaf) for e in high.child.edges)
    assert tree.depth() == 2


def test_construct_does_not_mutate_skeleton():
    ds = _nested_dataset()
    skeleton = choose_best_split(ds)
    tree = construct(skeleton, ds)
    assert all(isinstance(e, Leaf) for e in skeleton.edges)
    assert tree is not skeleton
    # the dataset itself is left intact
    assert ds.attributes == ("safety", "persons")
    assert len(ds) == 6


def test_recursion_stops_once_subsets_are_pure():
    # price separates the labels, doors is still available but uninformative
    ds = Dataset({"price": ["low", "low", "high", "high"],
                  "doors": ["2", "4", "2", "4"],
                  "label": ["acc", "acc", "unacc", "unacc"]})
    tree = build_tree(ds)
    assert tree.attribute == "price"
    assert all(isinstance(e, Leaf) for e in tree.edges)
    assert tree.depth() == 1


def test_identical_records_give_no_tree():
    ds = Dataset({"price": ["low"] * 4, "doors": ["2"] * 4,
                  "label": ["acc", "unacc", "acc", "unacc"]})
    assert build_tree(ds) is None


def test_leaf_counts_sum_to_node_rows():
    ds = _car_dataset()
    tree = build_tree(ds)
    assert sum(tree.distribution.values()) == len(ds)
    for node in _nodes(tree):
        leaf_total = sum(sum(leaf.distribution.values()) for leaf in node.leaves())
        assert leaf_total == sum(node.distribution.values())


def test_internal_edges_match_child_rows():
    tree = build_tree(_car_dataset())
    for node in _nodes(tree):
        for edge in node.edges:
            if isinstance(edge, Internal):
                assert edge.child.distribution == edge.distribution


def test_attribute_used_once_per_path():
    ds = _car_dataset()
    tree = build_tree(ds)
    for path in _paths(tree):
        assert len(path) == len(set(path))
    assert tree.depth() <= len(ds.attributes)


def test_leaves_are_never_empty():
    tree = build_tree(_car_dataset())
    assert all(sum(leaf.distribution.values()) > 0 for leaf in tree.leaves())
