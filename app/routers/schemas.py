"""
Shared request-schema base.

Request bodies use camelCase on the wire (`ownerId`, `filingType`) and
snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
