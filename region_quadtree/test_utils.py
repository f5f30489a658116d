def grid_rows(tree):
    """Collects the row-major iteration of a tree into a list of rows."""
    bounds = tree.bounds
    values = list(tree.iter())
    return [values[i:i + bounds.width]
            for i in range(0, len(values), bounds.width)]


def expect_values_unchanged(test_instance, tree, before, skip=()):
    """
    Checks that every cell outside `skip` still holds the value recorded in
    `before`, a dict mapping coordinates to values.
    """
    skip = set(skip)
    for point, value in before.items():
        if point in skip:
            continue
        test_instance.assertEqual(
            tree.get(point), value,
            "value at {} changed from {!r} to {!r}".format(
                point, value, tree.get(point)))
