"""Merge per-event labels with the statically configured default labels."""

from collections.abc import Iterable, Mapping


class LabelComposer:
    """Combines dynamic label names and values with a fixed default label set.

    A dynamic label whose name is also a default label keeps its dynamic
    value, and the name is declared only once.
    """

    def __init__(self, default_labels: Mapping[str, str] | None = None) -> None:
        self._defaults: dict[str, str] = dict(default_labels or {})

    @property
    def default_labels(self) -> dict[str, str]:
        return dict(self._defaults)

    def label_names(self, dynamic_names: Iterable[str]) -> tuple[str, ...]:
        """Declared label names for a metric: dynamic names, then defaults."""
        names = list(dynamic_names)
        names.extend(name for name in self._defaults if name not in names)
        return tuple(names)

    def compose(self, dynamic_labels: Mapping[str, str]) -> dict[str, str]:
        """Full label set for one series."""
        return {**self._defaults, **dynamic_labels}
