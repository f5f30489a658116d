def format_tree(tree):
    lines = []

    def visit(node, indent):
        if node.is_leaf():
            lines.append("{}leaf {} -> {!r}".format(indent, node.bounds, node.value))
            return
        lines.append("{}branch {}".format(indent, node.bounds))
        for child in node.children:
            visit(child, indent + "  ")

    visit(tree.root, "")
    return "\n".join(lines)


def debug_tree(tree, msg=""):
    print("[debug tree] {} ({} leaves, depth {})".format(
        msg, tree.leaf_count(), tree.depth()))
    print(format_tree(tree))


def check_consolidated(tree, msg=""):
    """
    Raises ValueError if the tree holds a branch whose four children are
    leaves with equal values, i.e. a branch that should have been merged.
    """
    pending = [tree.root]
    while pending:
        node = pending.pop()
        if node.is_leaf():
            continue
        children = node.children
        if len(children) != 4:
            raise ValueError("{}: branch {} has {} children".format(
                msg, node.bounds, len(children)))
        first = children[0]
        if all(c.is_leaf() for c in children) and all(
                c.value == first.value for c in children[1:]):
            raise ValueError("{}: branch {} is collapsible".format(msg, node.bounds))
        pending.extend(children)
