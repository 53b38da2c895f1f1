from typing import Any, TypeVar, Type
from pydantic import BaseModel

SourceType = TypeVar("SourceType", bound=BaseModel)
TargetType = TypeVar("TargetType", bound=BaseModel)


def map_known_fields(
    source: SourceType, target_class: Type[TargetType], **overrides: Any
) -> TargetType:
    """Build a target model from the source fields the target schema declares.

    Only fields present on `target_class` are copied, so identities and any
    bookkeeping fields the target does not declare are left behind. Overrides
    are applied last and go through the target's validation like any other
    value.

    Args:
        source: The source Pydantic model instance
        target_class: The target Pydantic model class to create
        **overrides: Field values replacing the copied ones

    Returns:
        Instance of target_class
    """
    known_fields = set(target_class.model_fields) & set(type(source).model_fields)
    data = source.model_dump(include=known_fields)
    data.update(overrides)
    return target_class(**data)
