"""Provider metadata for swapping infrastructure implementations."""

from typing import ClassVar, Literal, Type

from dishka import Provider

# Components with an in-memory stand-in
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for all forum providers.

    A provider with subclasses names a swappable component; each subclass
    is its Postgres-backed or in-memory variant. A provider without
    subclasses is concrete.

    Attributes:
        __mock_component__: Component name, None for concrete providers
        __is_mock__: Whether this is the in-memory variant
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool = False) -> Type["ProviderBase"]:
        """Pick the variant of this component.

        Raises:
            ValueError: If the requested variant is not registered
        """
        if not cls.is_mockable():
            return cls

        for variant in cls.__subclasses__():
            if variant.__is_mock__ == use_mock:
                return variant

        kind = "in-memory" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {cls.__mock_component__ or cls.__name__}"
        )
