"""Value object bases.

Both bases are frozen pydantic models, so value objects compare and hash by
value and can be used as dict keys and set members (circles are
``frozenset``s of identities, thread keys index comment lookups).
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Value object made of several fields."""

    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Value object wrapping one primitive.

    Serialises as the bare primitive; ``str()`` gives the wrapped value.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
