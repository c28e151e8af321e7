from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Either spelling is accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def money_field(default=..., **kwargs):
    # Fits Numeric(10, 2)
    return Field(default, ge=0, max_digits=10, decimal_places=2, **kwargs)
