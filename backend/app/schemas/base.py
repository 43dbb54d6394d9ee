from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Схема с camelCase-именами в JSON (snake_case тоже принимается на вход)"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
