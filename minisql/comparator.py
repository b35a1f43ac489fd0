"""Three-way comparison of ordered values."""


def basic_compare(left, right):
    """Return -1, 0 or 1 as left is less than, equal to or greater than right."""
    if left < right:
        return -1
    if left > right:
        return 1
    return 0