"""Selector sentinels for Surface.query()."""

from __future__ import annotations


class Not:
    """Exclude elements that carry this class."""

    __slots__ = ("cls",)

    def __init__(self, cls: str) -> None:
        self.cls = cls


class AnyOf:
    """Match elements that carry at least one of these classes."""

    __slots__ = ("classes",)

    def __init__(self, *classes: str) -> None:
        if not classes:
            raise ValueError("AnyOf requires at least one class name")
        self.classes = classes


class Tag:
    """Match elements by tag name."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name
