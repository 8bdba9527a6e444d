from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Union
from ..binary.codecs.byteorder import ByteOrder

class PrimitiveReading(BaseModel):
    offset: int = Field(..., ge=0)
    type: str
    byte_order: ByteOrder
    raw_hex: str
    value: Union[int, float, str]

class MediumInfo(BaseModel):
    path: str
    length: int = Field(..., ge=0)
