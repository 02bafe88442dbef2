from typing import Iterable, List, Union


class _NoChange:
    """Sentinel returned when the product already carries every rule tag."""

    def __repr__(self):
        return "NO_CHANGE"

    def __bool__(self):
        return False


NO_CHANGE = _NoChange()


def merge_product_tags(existing_tags: Iterable[str], rule_tags: Iterable[str]) -> Union[List[str], _NoChange]:
    """
    Decide the full tag list after adding rule tags to the existing ones.

    Existing tags are never removed. New tags are appended in sorted order so
    the result only depends on the inputs. Returns ``NO_CHANGE`` when nothing
    would be added.
    """
    merged = list(dict.fromkeys(existing_tags))
    present = set(merged)
    added = sorted(set(rule_tags) - present)
    if not added:
        return NO_CHANGE
    return merged + added
