from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class Envelope(BaseModel, Generic[T]):
    status: str = "success"
    message: str
    data: T

class MessageOut(BaseModel):
    status: str = "success"
    message: str
