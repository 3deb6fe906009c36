"""User domain entity.

Pure user representation with zero infrastructure dependencies.
"""

from uuid import UUID

from attrs import define, field, validators


@define(frozen=True, slots=True)
class User:
    """Immutable user entity.

    Identity is assigned by the caller before the user is created and never
    changes afterwards. Equality is structural across all fields.
    """

    id: UUID = field(validator=validators.instance_of(UUID))
    full_name: str = field(validator=validators.instance_of(str))
