"""Provider base class shared by every taxon provider."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with swappable production and in-memory implementations
Component = Literal["persistence"]


class ProviderBase(Provider):
    """A dishka provider tagged with the component it implements.

    Concrete providers leave ``__mock_component__`` unset. A component base
    sets it, and its subclasses set ``__is_mock__`` to tell the production
    implementation from the in-memory one.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
