# client/app/schemas/_base.py
"""
Base model for marketplace API payloads (camelCase JSON).
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }
