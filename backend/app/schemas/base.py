"""Shared schema base"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (the web client's convention)"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
