import enum

from pydantic import BaseModel, ConfigDict


def natnet_pydantic_config(frozen: bool = True) -> ConfigDict:
    """Model config shared by decoded records and decoder settings.

    Unknown fields are rejected and defaults are validated, so a record built
    with a misspelled field or a wrongly typed default fails at construction.
    """
    return ConfigDict(
        extra="forbid",
        validate_default=True,
        use_enum_values=True,
        frozen=frozen,
    )


class NatNetPydanticModel(BaseModel):
    """Base for every record produced by a decode call.

    Records are immutable once built, so one decoded frame can be handed to
    several consumers.
    """

    model_config = natnet_pydantic_config()


class NatNetEnum(str, enum.Enum):
    """String enum whose members compare equal to their plain string value."""

    def __init_subclass__(cls, **kwargs):
        for name, member in cls.__members__.items():
            if name != member.value:
                raise ValueError(f"{cls.__name__}.{name} must have the value '{name}'")
        super().__init_subclass__(**kwargs)

    def __eq__(self, other):
        if isinstance(other, str):
            return self.value == other
        return super().__eq__(other)

    def __hash__(self):
        return hash(self.value)
