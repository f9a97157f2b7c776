"""Shared schema configuration"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema that reads snake_case attributes and speaks camelCase JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
