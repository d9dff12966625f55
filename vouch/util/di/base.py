"""Provider base class and component names."""

from typing import ClassVar, Literal

from dishka import Provider

# Swappable components; tests replace these with in-memory versions
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Every provider in ``PROVIDERS`` derives from this.

    A component base sets ``__mock_component__``; its subclasses set
    ``__is_mock__`` to say which side of the swap they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
