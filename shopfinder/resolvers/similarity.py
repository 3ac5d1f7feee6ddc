from typing import Optional


def is_similar_name(name1: Optional[str], name2: Optional[str]) -> bool:
    """
    Permissive check that two establishment names refer to the same business.

    Names match when one contains the other (case-insensitive) or when they
    share a word longer than 3 characters. Over-matching is preferred to
    hiding a plausible result.

    Args:
        name1 (Optional[str]): First name.
        name2 (Optional[str]): Second name.

    Returns:
        bool: True if the names look like the same establishment.
    """
    if not name1 or not name2:
        return False

    n1 = name1.lower().strip()
    n2 = name2.lower().strip()

    if n1 in n2 or n2 in n1:
        return True

    words2 = set(n2.split())
    return any(len(w) > 3 and w in words2 for w in n1.split())
