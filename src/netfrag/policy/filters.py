from collections.abc import Mapping

from netfrag.app.protocols import SequenceFilter


class AcceptAllFilter(SequenceFilter):
    def accepts(self, tags: Mapping[str, str]) -> bool:
        return True


class TagFilter(SequenceFilter):
    """Accept sequences carrying `key` (and, if `values` is set, one of those values)."""

    def __init__(self, key: str, values: list[str] | None = None):
        self.key = key
        self.values = frozenset(values) if values else None

    def accepts(self, tags: Mapping[str, str]) -> bool:
        if self.key not in tags:
            return False
        return self.values is None or tags[self.key] in self.values
