"""Provider base class and the names of swappable components."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests replace with in-process fakes
Component = Literal["google", "persistence"]


class ProviderBase(Provider):
    """Every provider in the app derives from this.

    A swappable component is declared as an empty subclass naming the
    component in ``__mock_component__``; its implementations subclass that
    in turn and set ``__is_mock__``. Providers without subclasses are used
    as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
